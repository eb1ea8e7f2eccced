"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class TaskStatus(StrEnum):
    """Task lifecycle state."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Task(BaseModel):
    """Task data transfer object.

    Serialized with ``by_alias=True`` to produce the camelCase wire names
    (``userId``, ``createdAt``, ``updatedAt``).
    """

    id: str = Field(..., description="Unique task ID, assigned at creation")
    title: str = Field(..., min_length=3, description="Task title")
    description: str | None = Field(default=None, description="Optional task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current lifecycle state")
    user_id: str = Field(..., serialization_alias="userId", description="Owning user ID")
    created_at: datetime = Field(..., serialization_alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., serialization_alias="updatedAt", description="Last mutation timestamp")

    def to_response(self) -> dict:
        """JSON-ready dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True)
