"""Task persistence over the ``tasks`` table.

The store only performs CRUD; ownership checks and status rules belong to the
service layer.
"""

import logging
from datetime import UTC, datetime
from typing import Any, Protocol

from src.core.db_client import Database
from src.core.errors import RecordNotFoundError
from src.domain.task import Task, TaskStatus
from src.modules.tasks.query import TaskQuerySpec


logger = logging.getLogger(__name__)

_COLUMNS = ("id", "title", "description", "status", "user_id", "created_at", "updated_at")
_UPDATABLE_COLUMNS = frozenset({"title", "description", "status", "updated_at"})


class TaskStore(Protocol):
    """Task storage interface."""

    async def insert(self, task: Task) -> Task: ...

    async def find_by_id(self, task_id: str) -> Task | None: ...

    async def find_by_id_and_owner(self, task_id: str, user_id: str) -> Task | None: ...

    async def find_many(self, spec: TaskQuerySpec) -> tuple[list[Task], int]: ...

    async def update(self, task_id: str, fields: dict[str, Any]) -> Task: ...

    async def delete(self, task_id: str) -> None: ...

    async def delete_for_owner(self, user_id: str) -> int: ...


def _to_db_value(value: Any) -> Any:
    if isinstance(value, datetime):
        # Fixed-width UTC text so lexical order matches time order
        return value.astimezone(UTC).isoformat(timespec="microseconds")
    if isinstance(value, TaskStatus):
        return value.value
    return value


def _row_to_task(row: dict[str, Any]) -> Task:
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        user_id=row["user_id"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class SqliteTaskStore:
    """TaskStore backed by SQLite."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(self, task: Task) -> Task:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        values = [_to_db_value(getattr(task, column)) for column in _COLUMNS]
        await self._db.execute(
            f"INSERT INTO tasks ({', '.join(_COLUMNS)}) VALUES ({placeholders})",  # noqa: S608 - fixed column list
            values,
        )
        logger.info("Created record", extra={"collection": "tasks", "record_id": task.id})
        return task

    async def find_by_id(self, task_id: str) -> Task | None:
        row = await self._db.fetch_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        return _row_to_task(row) if row is not None else None

    async def find_by_id_and_owner(self, task_id: str, user_id: str) -> Task | None:
        row = await self._db.fetch_one(
            "SELECT * FROM tasks WHERE id = ? AND user_id = ?",
            (task_id, user_id),
        )
        return _row_to_task(row) if row is not None else None

    async def find_many(self, spec: TaskQuerySpec) -> tuple[list[Task], int]:
        """Return one page of matching tasks and the total number of matches."""
        where, params = spec.where_clause()

        count_row = await self._db.fetch_one(
            f"SELECT COUNT(*) AS total FROM tasks WHERE {where}",  # noqa: S608 - clause built from fixed fragments
            params,
        )
        total = int(count_row["total"]) if count_row else 0

        rows = await self._db.fetch_all(
            f"SELECT * FROM tasks WHERE {where} ORDER BY {spec.order_by_clause()} LIMIT ? OFFSET ?",  # noqa: S608
            [*params, spec.limit, spec.offset],
        )
        tasks = [_row_to_task(row) for row in rows]

        logger.debug("Listed records", extra={"collection": "tasks", "count": len(tasks), "total": total})
        return tasks, total

    async def update(self, task_id: str, fields: dict[str, Any]) -> Task:
        """Write the given columns and return the stored task.

        Raises:
            ValueError: If ``fields`` is empty or names a column that cannot change
            RecordNotFoundError: If no task has ``task_id``
        """
        if not fields:
            raise ValueError("Empty update payload")
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns cannot be updated: {sorted(unknown)}")

        set_clause = ", ".join(f"{column} = ?" for column in fields)
        values = [_to_db_value(value) for value in fields.values()]
        changed = await self._db.execute(
            f"UPDATE tasks SET {set_clause} WHERE id = ?",  # noqa: S608 - columns are whitelisted
            [*values, task_id],
        )
        if changed == 0:
            raise RecordNotFoundError

        task = await self.find_by_id(task_id)
        if task is None:
            raise RecordNotFoundError

        logger.info("Updated record", extra={"collection": "tasks", "record_id": task_id})
        return task

    async def delete(self, task_id: str) -> None:
        changed = await self._db.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        if changed == 0:
            raise RecordNotFoundError
        logger.info("Deleted record", extra={"collection": "tasks", "record_id": task_id})

    async def delete_for_owner(self, user_id: str) -> int:
        """Remove every task owned by ``user_id``. Returns the number removed."""
        removed = await self._db.execute("DELETE FROM tasks WHERE user_id = ?", (user_id,))
        logger.info("Deleted owner records", extra={"collection": "tasks", "count": removed})
        return removed
