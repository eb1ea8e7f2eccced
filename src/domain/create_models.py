"""Pydantic models for creating records in database."""

from pydantic import BaseModel, Field

from src.core.config import constants
from src.domain.task import TaskStatus


class TaskCreate(BaseModel):
    """Pydantic model for creating a task record."""

    title: str = Field(
        ...,
        min_length=constants.MIN_TITLE_LENGTH,
        description="Task title (at least 3 characters)",
    )
    description: str | None = Field(default=None, description="Optional task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")
