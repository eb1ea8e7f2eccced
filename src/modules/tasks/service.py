"""Task lifecycle service: the single entry point for reading and mutating tasks."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from src.core.errors import NotFoundError
from src.core.logging import log_task_event, span
from src.domain.create_models import TaskCreate
from src.domain.task import Task
from src.domain.update_models import TaskUpdate
from src.modules.tasks.query import TaskPage, TaskQuery, build_query, paginate
from src.modules.tasks.state_machine import validate_transition
from src.modules.tasks.store import TaskStore


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_task_id() -> str:
    return str(uuid.uuid4())


class TaskService:
    """Enforces ownership and status rules on top of a TaskStore.

    Every lookup is scoped by both task id and owner id. A task that belongs to
    someone else is reported exactly like a task that does not exist.
    Errors from the state machine and the store propagate unchanged.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    async def create(self, user_id: str, data: TaskCreate) -> Task:
        """Create a task owned by ``user_id``.

        Args:
            user_id: Authenticated owner
            data: Validated create payload (status defaults to PENDING)

        Returns:
            The stored task

        Raises:
            StorageError: If the insert fails
        """
        with span("task_service.create"):
            now = self._clock()
            task = Task(
                id=self._id_factory(),
                title=data.title,
                description=data.description,
                status=data.status,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
            created = await self._store.insert(task)

            log_task_event(logger, "info", "Task created", user_id=user_id, task_id=created.id)
            return created

    async def list(self, user_id: str, params: TaskQuery | None = None) -> TaskPage:
        """Return one page of the caller's tasks.

        Filtering, sorting and pagination come from ``params`` after clamping;
        the owner filter is always applied on top.
        """
        with span("task_service.list"):
            spec = build_query(user_id, params)
            tasks, total = await self._store.find_many(spec)

            logger.debug(
                "Retrieved %d of %d tasks",
                len(tasks),
                total,
                extra={"user_id": user_id, "page": spec.page, "limit": spec.limit},
            )
            return paginate(tasks, total, spec)

    async def get_by_id(self, user_id: str, task_id: str) -> Task:
        """Get one of the caller's tasks.

        Raises:
            NotFoundError: If the task does not exist or belongs to another user
        """
        with span("task_service.get_by_id", task_id=task_id):
            task = await self._store.find_by_id_and_owner(task_id, user_id)
            if task is None:
                raise NotFoundError
            return task

    async def update(self, user_id: str, task_id: str, data: TaskUpdate) -> Task:
        """Apply a partial update to one of the caller's tasks.

        Only fields present in ``data`` are written. When ``status`` is present
        the transition is validated once, before anything is persisted.

        Raises:
            NotFoundError: If the task does not exist or belongs to another user
            TerminalStateError: If the task is COMPLETED or CANCELED and a different status is requested
            InvalidTransitionError: If the requested status is not reachable from PENDING
            StorageError: If the write fails
        """
        with span("task_service.update", task_id=task_id):
            current = await self.get_by_id(user_id, task_id)
            changes: dict[str, Any] = data.changes()

            if "status" in changes:
                validate_transition(current.status, changes["status"])

            changes["updated_at"] = self._clock()
            updated = await self._store.update(task_id, changes)

            log_task_event(
                logger,
                "info",
                "Task updated",
                user_id=user_id,
                task_id=task_id,
                fields=sorted(data.model_fields_set),
            )
            return updated

    async def delete(self, user_id: str, task_id: str) -> None:
        """Delete one of the caller's tasks.

        Raises:
            NotFoundError: If the task does not exist or belongs to another user
        """
        with span("task_service.delete", task_id=task_id):
            await self.get_by_id(user_id, task_id)
            await self._store.delete(task_id)

            log_task_event(logger, "info", "Task deleted", user_id=user_id, task_id=task_id)

    async def delete_all_for_user(self, user_id: str) -> int:
        """Remove every task of a user whose account is being deleted."""
        with span("task_service.delete_all_for_user"):
            removed = await self._store.delete_for_owner(user_id)

            log_task_event(logger, "info", "Deleted tasks for user", user_id=user_id, count=removed)
            return removed
