"""Redirect resolution replacing the transport's own redirect handling."""

from nativehttp.redirect.resolver import RedirectResolver
from nativehttp.redirect.state_machine import (
    RedirectState,
    RedirectStateMachine,
    RedirectStateTransitionError,
)


__all__ = [
    "RedirectResolver",
    "RedirectState",
    "RedirectStateMachine",
    "RedirectStateTransitionError",
]
