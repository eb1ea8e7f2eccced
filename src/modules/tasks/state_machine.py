"""Pure state transition rules for task lifecycle management."""

import logging

from src.core.errors import InvalidTransitionError, TerminalStateError
from src.domain.task import TaskStatus


logger = logging.getLogger(__name__)


VALID_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.PENDING: {TaskStatus.COMPLETED, TaskStatus.CANCELED},
    TaskStatus.COMPLETED: set(),
    TaskStatus.CANCELED: set(),
}

TERMINAL_STATES: frozenset[TaskStatus] = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELED})


def validate_transition(current: TaskStatus, requested: TaskStatus) -> None:
    """Check that a task in ``current`` may move to ``requested``.

    A request for the status the task already has is a no-op and always
    allowed, terminal states included.

    Raises:
        TerminalStateError: If the task is COMPLETED or CANCELED
        InvalidTransitionError: If ``requested`` is not a successor of ``current``
    """
    if requested == current:
        return

    if current in TERMINAL_STATES:
        logger.debug("Rejected transition out of terminal state", extra={"current": current, "requested": requested})
        raise TerminalStateError

    if requested not in VALID_TRANSITIONS.get(current, set()):
        logger.debug("Rejected invalid transition", extra={"current": current, "requested": requested})
        raise InvalidTransitionError


def can_transition(current: TaskStatus, requested: TaskStatus) -> bool:
    """Boolean form of validate_transition."""
    try:
        validate_transition(current, requested)
    except (TerminalStateError, InvalidTransitionError):
        return False
    return True
