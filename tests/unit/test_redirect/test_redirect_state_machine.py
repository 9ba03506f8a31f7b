"""Tests for the redirect state machine."""

import pytest

from nativehttp.redirect.state_machine import (
    RedirectState,
    RedirectStateMachine,
    RedirectStateTransitionError,
)


class TestRedirectStateMachine:
    """Tests for RedirectStateMachine."""

    def test_initial_state_is_pending(self) -> None:
        """A new machine waits for a response."""
        machine = RedirectStateMachine()

        assert machine.state == RedirectState.PENDING
        assert machine.is_terminal is False

    def test_applied_hop_returns_to_pending(self) -> None:
        """Each followed redirect loops back to PENDING."""
        machine = RedirectStateMachine()

        machine.transition_to(RedirectState.REDIRECT_APPLIED)
        machine.begin_hop()

        assert machine.state == RedirectState.PENDING

    def test_begin_hop_is_noop_when_pending(self) -> None:
        """begin_hop leaves a pending machine alone."""
        machine = RedirectStateMachine()

        machine.begin_hop()

        assert machine.state == RedirectState.PENDING

    @pytest.mark.parametrize(
        "terminal",
        [
            RedirectState.NO_REDIRECT,
            RedirectState.REDIRECT_EXHAUSTED,
            RedirectState.REDIRECT_FAILED,
        ],
    )
    def test_terminal_states_accept_nothing(self, terminal: RedirectState) -> None:
        """No transition leaves a terminal state."""
        machine = RedirectStateMachine()
        machine.transition_to(terminal)

        assert machine.is_terminal is True
        for target in RedirectState:
            assert machine.can_transition_to(target) is False

    def test_illegal_transition_raises(self) -> None:
        """APPLIED cannot jump straight to a terminal state."""
        machine = RedirectStateMachine(RedirectState.REDIRECT_APPLIED)

        with pytest.raises(RedirectStateTransitionError) as exc_info:
            machine.transition_to(RedirectState.NO_REDIRECT)

        assert exc_info.value.from_state == RedirectState.REDIRECT_APPLIED
        assert exc_info.value.to_state == RedirectState.NO_REDIRECT
        assert "REDIRECT_APPLIED -> NO_REDIRECT" in str(exc_info.value)
        assert machine.state == RedirectState.REDIRECT_APPLIED

    def test_failed_hop_is_terminal(self) -> None:
        """A hop that could not be prepared ends resolution."""
        machine = RedirectStateMachine()

        machine.transition_to(RedirectState.REDIRECT_FAILED)
        machine.begin_hop()

        assert machine.state == RedirectState.REDIRECT_FAILED
        assert machine.is_terminal is True
