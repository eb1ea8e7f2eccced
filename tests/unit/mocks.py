"""Test doubles for unit tests."""

from datetime import UTC, datetime, timedelta
from typing import Any

from src.core.errors import StorageError
from src.domain.task import Task
from src.modules.tasks.query import TaskQuerySpec


class FakeClock:
    """Clock that advances a fixed step on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2026, 1, 19, 9, 0, 0, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class FailingTaskStore:
    """TaskStore whose every operation fails with StorageError."""

    def __init__(self, message: str = "disk I/O error") -> None:
        self.message = message
        self.calls: list[str] = []

    def _fail(self, operation: str) -> StorageError:
        self.calls.append(operation)
        return StorageError(self.message)

    async def insert(self, task: Task) -> Task:
        raise self._fail("insert")

    async def find_by_id(self, task_id: str) -> Task | None:
        raise self._fail("find_by_id")

    async def find_by_id_and_owner(self, task_id: str, user_id: str) -> Task | None:
        raise self._fail("find_by_id_and_owner")

    async def find_many(self, spec: TaskQuerySpec) -> tuple[list[Task], int]:
        raise self._fail("find_many")

    async def update(self, task_id: str, fields: dict[str, Any]) -> Task:
        raise self._fail("update")

    async def delete(self, task_id: str) -> None:
        raise self._fail("delete")

    async def delete_for_owner(self, user_id: str) -> int:
        raise self._fail("delete_for_owner")
