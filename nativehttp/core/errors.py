"""Error types for the native HTTP client."""

from enum import Enum


class HttpClientErrorClass(str, Enum):
    """Classification of client errors.

    - RESOLUTION: DNS lookup failed, on any hop
    - CONFIGURATION: Invalid URL, Location, proxy or fingerprint settings
    - UNSUPPORTED_FEATURE: Requested feature not available on raw sockets
    - PROTOCOL: Malformed request body stream
    - TYPE_MISMATCH: Invalid argument passed to stream()
    """

    RESOLUTION = "RESOLUTION"
    CONFIGURATION = "CONFIGURATION"
    UNSUPPORTED_FEATURE = "UNSUPPORTED_FEATURE"
    PROTOCOL = "PROTOCOL"
    TYPE_MISMATCH = "TYPE_MISMATCH"


class TransportError(Exception):
    """Base exception for client errors.

    Provides structured error information for logging and metrics.
    """

    def __init__(
        self,
        error_class: HttpClientErrorClass,
        message: str,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        """Initialize the transport error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(
        self,
    ) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class ResolutionError(TransportError):
    """Raised when a host name cannot be resolved."""

    def __init__(self, host: str) -> None:
        """Initialize the resolution error.

        Args:
            host: Host name that failed to resolve.
        """
        super().__init__(
            error_class=HttpClientErrorClass.RESOLUTION,
            message=f'Could not resolve host "{host}".',
            details={"host": host},
        )
        self.host = host


class ConfigurationError(TransportError):
    """Raised for invalid URLs, redirect targets, proxy or fingerprint settings."""

    def __init__(self, message: str, option: str | None = None) -> None:
        details: dict[str, str | int | bool | None] = {}
        if option is not None:
            details["option"] = option
        super().__init__(
            error_class=HttpClientErrorClass.CONFIGURATION,
            message=message,
            details=details,
        )
        self.option = option


class UnsupportedFeatureError(TransportError):
    """Raised when binding to a local (Unix socket) address is requested."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_class=HttpClientErrorClass.UNSUPPORTED_FEATURE,
            message=message,
        )


class ProtocolError(TransportError):
    """Raised when a streamed request body yields a non-string chunk."""

    def __init__(self, message: str, chunk_type: str | None = None) -> None:
        details: dict[str, str | int | bool | None] = {}
        if chunk_type is not None:
            details["chunk_type"] = chunk_type
        super().__init__(
            error_class=HttpClientErrorClass.PROTOCOL,
            message=message,
            details=details,
        )
        self.chunk_type = chunk_type


class TypeMismatchError(TransportError, TypeError):
    """Raised when stream() receives something other than response handles."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_class=HttpClientErrorClass.TYPE_MISMATCH,
            message=message,
        )
