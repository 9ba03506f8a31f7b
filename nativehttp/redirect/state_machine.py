"""State machine for redirect resolution of one top-level request."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class RedirectState(str, Enum):
    """State of redirect resolution.

    - PENDING: Waiting for the next redirect-eligible response
    - NO_REDIRECT: Response carried no usable redirect (terminal)
    - REDIRECT_EXHAUSTED: Redirect limit reached (terminal)
    - REDIRECT_APPLIED: Next hop configured; returns to PENDING
    - REDIRECT_FAILED: Next hop could not be prepared (terminal)
    """

    PENDING = "PENDING"
    NO_REDIRECT = "NO_REDIRECT"
    REDIRECT_EXHAUSTED = "REDIRECT_EXHAUSTED"
    REDIRECT_APPLIED = "REDIRECT_APPLIED"
    REDIRECT_FAILED = "REDIRECT_FAILED"


# Valid state transitions
_VALID_TRANSITIONS: dict[RedirectState, set[RedirectState]] = {
    RedirectState.PENDING: {
        RedirectState.NO_REDIRECT,
        RedirectState.REDIRECT_EXHAUSTED,
        RedirectState.REDIRECT_APPLIED,
        RedirectState.REDIRECT_FAILED,
    },
    RedirectState.REDIRECT_APPLIED: {RedirectState.PENDING},
    RedirectState.NO_REDIRECT: set(),  # Terminal state
    RedirectState.REDIRECT_EXHAUSTED: set(),  # Terminal state
    RedirectState.REDIRECT_FAILED: set(),  # Terminal state
}


class RedirectStateTransitionError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(self, from_state: RedirectState, to_state: RedirectState) -> None:
        """Initialize the transition error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal redirect state transition: {from_state.value} -> {to_state.value}"
        )


class RedirectStateMachine:
    """Tracks and validates redirect state transitions."""

    def __init__(self, initial_state: RedirectState = RedirectState.PENDING) -> None:
        self._state = initial_state
        self._log = logger.bind(component="redirect")

    @property
    def state(self) -> RedirectState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state in (
            RedirectState.NO_REDIRECT,
            RedirectState.REDIRECT_EXHAUSTED,
            RedirectState.REDIRECT_FAILED,
        )

    def can_transition_to(self, target: RedirectState) -> bool:
        """Check if a transition to the target state is valid."""
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: RedirectState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            RedirectStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise RedirectStateTransitionError(self._state, target)

        old_state = self._state
        self._state = target
        self._log.debug(
            "state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def begin_hop(self) -> None:
        """Re-enter PENDING after a redirect was applied."""
        if self._state == RedirectState.REDIRECT_APPLIED:
            self.transition_to(RedirectState.PENDING)
