"""Observability module for structured logging."""

from nativehttp.observability.logging import (
    configure_logging,
    get_logger,
    redact_event_credentials,
)


__all__ = [
    "configure_logging",
    "get_logger",
    "redact_event_credentials",
]
