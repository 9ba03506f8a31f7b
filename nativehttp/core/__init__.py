"""Core types shared by the native HTTP client layers."""

from nativehttp.core.constants import (
    CHUNK_SIZE,
    DEFAULT_HTTP_PORT,
    DEFAULT_HTTPS_PORT,
    DEFAULT_MAX_HOST_CONNECTIONS,
    DEFAULT_MAX_REDIRECTS,
)
from nativehttp.core.errors import (
    ConfigurationError,
    HttpClientErrorClass,
    ProtocolError,
    ResolutionError,
    TransportError,
    TypeMismatchError,
    UnsupportedFeatureError,
)
from nativehttp.core.metrics import ClientMetrics
from nativehttp.core.models import ProxyDescriptor, TrackedRequestInfo
from nativehttp.core.redact import redact_headers, redact_url_credentials
from nativehttp.core.transport import (
    HttpContextOptions,
    SocketContextOptions,
    SslContextOptions,
    TransportConfig,
)


__all__ = [
    # Constants
    "CHUNK_SIZE",
    "DEFAULT_HTTP_PORT",
    "DEFAULT_HTTPS_PORT",
    "DEFAULT_MAX_HOST_CONNECTIONS",
    "DEFAULT_MAX_REDIRECTS",
    # Errors
    "ConfigurationError",
    "HttpClientErrorClass",
    "ProtocolError",
    "ResolutionError",
    "TransportError",
    "TypeMismatchError",
    "UnsupportedFeatureError",
    # Metrics
    "ClientMetrics",
    # Models
    "ProxyDescriptor",
    "TrackedRequestInfo",
    # Redaction
    "redact_headers",
    "redact_url_credentials",
    # Transport
    "HttpContextOptions",
    "SocketContextOptions",
    "SslContextOptions",
    "TransportConfig",
]
