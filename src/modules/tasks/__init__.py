"""Tasks module: lifecycle rules, query building, persistence and the service."""

from src.modules.tasks.query import SortField, SortOrder, TaskPage, TaskQuery, TaskQuerySpec, build_query
from src.modules.tasks.service import TaskService
from src.modules.tasks.state_machine import TERMINAL_STATES, VALID_TRANSITIONS, can_transition, validate_transition
from src.modules.tasks.store import SqliteTaskStore, TaskStore


__all__ = [
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "SortField",
    "SortOrder",
    "SqliteTaskStore",
    "TaskPage",
    "TaskQuery",
    "TaskQuerySpec",
    "TaskService",
    "TaskStore",
    "build_query",
    "can_transition",
    "validate_transition",
]
