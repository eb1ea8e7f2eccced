"""Translate raw list parameters into a bounded, parameterized task query."""

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.config import constants, settings
from src.core.db_client import CASEFOLD_FUNCTION
from src.domain.task import Task, TaskStatus


class SortField(StrEnum):
    """Columns a task list can be sorted by (public names)."""

    CREATED_AT = "createdAt"
    TITLE = "title"
    STATUS = "status"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_FIELD = SortField.CREATED_AT
DEFAULT_SORT_ORDER = SortOrder.DESC

# Lifecycle order, so status sorting follows PENDING, COMPLETED, CANCELED
_STATUS_RANK_SQL = (
    "CASE status "
    + " ".join(f"WHEN '{status.value}' THEN {rank}" for rank, status in enumerate(TaskStatus))
    + " END"
)

_SORT_COLUMNS: dict[SortField, str] = {
    SortField.CREATED_AT: "created_at",
    SortField.TITLE: f"{CASEFOLD_FUNCTION}(title)",
    SortField.STATUS: _STATUS_RANK_SQL,
}


def _to_int_or_none(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class TaskQuery(BaseModel):
    """Raw list parameters as received from a caller.

    Values are loosely typed: page and limit may arrive as query-string text,
    unparseable numbers fall back to defaults, unknown sort keys are ignored.
    Range enforcement happens in build_query.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int | None = None
    limit: int | None = None
    status: TaskStatus | None = None
    search: str | None = None
    sort_by: SortField | None = Field(default=None, alias="sortBy")
    sort_order: SortOrder | None = Field(default=None, alias="sortOrder")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def coerce_int(cls, v: Any) -> int | None:
        return _to_int_or_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("search", mode="before")
    @classmethod
    def blank_search_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("sort_by", mode="before")
    @classmethod
    def known_sort_field(cls, v: Any) -> SortField | None:
        try:
            return SortField(v)
        except ValueError:
            return None

    @field_validator("sort_order", mode="before")
    @classmethod
    def known_sort_order(cls, v: Any) -> SortOrder | None:
        try:
            return SortOrder(v.lower() if isinstance(v, str) else v)
        except ValueError:
            return None


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class TaskQuerySpec:
    """Validated and clamped query, always scoped to one owner."""

    user_id: str
    page: int
    limit: int
    status: TaskStatus | None = None
    search: str | None = None
    sort_by: SortField = DEFAULT_SORT_FIELD
    sort_order: SortOrder = DEFAULT_SORT_ORDER

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def where_clause(self) -> tuple[str, list[str]]:
        """WHERE body and its parameters. Ownership is always the first condition."""
        conditions = ["user_id = ?"]
        params = [self.user_id]

        if self.status is not None:
            conditions.append("status = ?")
            params.append(self.status.value)

        if self.search is not None:
            conditions.append(f"{CASEFOLD_FUNCTION}(title) LIKE ? ESCAPE '\\'")
            params.append(f"%{escape_like(self.search.casefold())}%")

        return " AND ".join(conditions), params

    def order_by_clause(self) -> str:
        """ORDER BY body.

        Sorting by anything other than createdAt adds ``created_at DESC`` as a
        secondary key; ``id`` is the final tie-break.
        """
        direction = "ASC" if self.sort_order == SortOrder.ASC else "DESC"
        keys = [f"{_SORT_COLUMNS[self.sort_by]} {direction}"]
        if self.sort_by != SortField.CREATED_AT:
            keys.append("created_at DESC")
        keys.append("id ASC")
        return ", ".join(keys)


def clamp_page(page: int | None) -> int:
    if page is None:
        return constants.MIN_PAGE
    return min(max(constants.MIN_PAGE, page), constants.MAX_PAGE)


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        limit = settings.default_page_limit
    return min(max(constants.MIN_PAGE_LIMIT, limit), constants.MAX_PAGE_LIMIT)


def build_query(user_id: str, params: TaskQuery | None = None) -> TaskQuerySpec:
    """Shape raw list parameters into a query specification for ``user_id``.

    Page is coerced to at least 1, limit to the range [1, 100]. Out of range
    values are never rejected.
    """
    params = params or TaskQuery()
    return TaskQuerySpec(
        user_id=user_id,
        page=clamp_page(params.page),
        limit=clamp_limit(params.limit),
        status=params.status,
        search=params.search,
        sort_by=params.sort_by or DEFAULT_SORT_FIELD,
        sort_order=params.sort_order or DEFAULT_SORT_ORDER,
    )


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` rows, 0 when there are none."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


class TaskPage(BaseModel):
    """One page of a user's tasks plus pagination metadata."""

    tasks: list[Task]
    total: int
    page: int
    limit: int
    total_pages: int

    def pagination(self) -> dict[str, int]:
        """Pagination block for list responses."""
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def paginate(tasks: list[Task], total: int, spec: TaskQuerySpec) -> TaskPage:
    """Combine a fetched page with its metadata."""
    return TaskPage(
        tasks=tasks,
        total=total,
        page=spec.page,
        limit=spec.limit,
        total_pages=total_pages(total, spec.limit),
    )
