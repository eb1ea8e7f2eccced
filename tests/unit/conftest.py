"""Pytest configuration and fixtures for unit tests."""

from collections.abc import Awaitable, Callable

import pytest

from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskStatus
from src.modules.tasks.service import TaskService


USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def user_id() -> str:
    """ID of the user owning test tasks."""
    return USER_ID


@pytest.fixture
def other_user_id() -> str:
    """ID of a user who owns none of the test tasks."""
    return OTHER_USER_ID


@pytest.fixture
def sample_task_data() -> dict:
    """Returns sample task create payload."""
    return {
        "title": "Buy milk",
        "description": "Two litres, semi-skimmed",
    }


@pytest.fixture
def make_task(task_service: TaskService) -> Callable[..., Awaitable[Task]]:
    """Factory creating tasks through the service."""

    async def _make_task(
        title: str,
        *,
        owner: str = USER_ID,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        return await task_service.create(owner, TaskCreate(title=title, description=description, status=status))

    return _make_task
