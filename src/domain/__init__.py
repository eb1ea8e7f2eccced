"""Domain models and DTOs."""

from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskStatus
from src.domain.update_models import TaskUpdate
from src.domain.user import AuthenticatedUser


__all__ = [
    "AuthenticatedUser",
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
]
