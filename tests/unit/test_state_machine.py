"""Unit tests for task status transition rules."""

import pytest

from src.core.errors import InvalidTransitionError, TerminalStateError, TransitionError
from src.domain.task import TaskStatus
from src.modules.tasks.state_machine import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    can_transition,
    validate_transition,
)


@pytest.mark.unit
class TestValidateTransition:
    """Tests for validate_transition."""

    @pytest.mark.parametrize("requested", [TaskStatus.COMPLETED, TaskStatus.CANCELED])
    def test_pending_can_finish(self, requested):
        validate_transition(TaskStatus.PENDING, requested)

    @pytest.mark.parametrize("status", list(TaskStatus))
    def test_same_status_is_noop(self, status):
        """Same-status requests are allowed in every state, terminal ones included."""
        validate_transition(status, status)

    @pytest.mark.parametrize(
        "current,requested",
        [
            (TaskStatus.COMPLETED, TaskStatus.PENDING),
            (TaskStatus.COMPLETED, TaskStatus.CANCELED),
            (TaskStatus.CANCELED, TaskStatus.PENDING),
            (TaskStatus.CANCELED, TaskStatus.COMPLETED),
        ],
    )
    def test_terminal_states_are_final(self, current, requested):
        with pytest.raises(TerminalStateError, match="Cannot change status of completed or canceled task"):
            validate_transition(current, requested)

    def test_pending_to_unreachable_status(self, monkeypatch):
        """An unmapped successor from PENDING is an invalid transition, not a terminal one."""
        monkeypatch.setitem(VALID_TRANSITIONS, TaskStatus.PENDING, {TaskStatus.COMPLETED})

        with pytest.raises(InvalidTransitionError, match="Pending tasks can only be changed to completed or canceled"):
            validate_transition(TaskStatus.PENDING, TaskStatus.CANCELED)

    def test_errors_share_a_base(self):
        assert issubclass(TerminalStateError, TransitionError)
        assert issubclass(InvalidTransitionError, TransitionError)


@pytest.mark.unit
class TestTransitionTable:
    """Tests for the declared transition map."""

    def test_terminal_states(self):
        assert frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELED}) == TERMINAL_STATES

    def test_terminal_states_have_no_successors(self):
        for status in TERMINAL_STATES:
            assert VALID_TRANSITIONS[status] == set()

    def test_every_status_is_mapped(self):
        assert set(VALID_TRANSITIONS) == set(TaskStatus)

    def test_can_transition(self):
        assert can_transition(TaskStatus.PENDING, TaskStatus.COMPLETED) is True
        assert can_transition(TaskStatus.COMPLETED, TaskStatus.COMPLETED) is True
        assert can_transition(TaskStatus.CANCELED, TaskStatus.PENDING) is False
