"""Update models for database operations."""

from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

from src.core.config import constants
from src.domain.task import TaskStatus


class TaskUpdate(BaseModel):
    """Partial update payload for a task.

    Only fields the caller actually sent are applied. Pydantic records those in
    ``model_fields_set``, which keeps an absent field apart from an explicit null.
    """

    title: str | None = Field(default=None, min_length=constants.MIN_TITLE_LENGTH)
    description: str | None = None
    status: TaskStatus | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> Self:
        """Title and status may be omitted but never cleared."""
        for name in ("title", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly supplied fields."""
        return {name: getattr(self, name) for name in self.model_fields_set}
