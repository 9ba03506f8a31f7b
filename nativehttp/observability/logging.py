"""Structured logging configuration for applications embedding the client."""

import logging
import sys
from collections.abc import Mapping, MutableMapping
from typing import Any, TextIO

import structlog

from nativehttp.core.redact import redact_headers, redact_url_credentials


# Event keys that may carry URLs with userinfo
_URL_KEYS = ("url", "proxy", "redirect_url", "location")


def redact_event_credentials(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credentials that reached an event unredacted.

    Call sites already redact what they log; this processor catches URLs
    and header mappings bound by embedding applications.
    """
    for key in _URL_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = redact_url_credentials(value)

    headers = event_dict.get("headers")
    if isinstance(headers, Mapping):
        event_dict["headers"] = redact_headers(headers.items())

    return event_dict


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Route client events through structlog.

    Every event gets a level and an ISO timestamp, and credentials in
    ``url``, ``proxy`` and ``headers`` fields are masked before rendering.

    Args:
        level: Minimum level of emitted events (default: INFO).
        output: Stream receiving rendered events (default: stderr).
        json_format: Render JSON lines instead of colored console output.
    """
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_event_credentials,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=output, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger for a client module."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
