"""Portable HTTP client built directly on raw socket streams."""

from nativehttp.client import NativeHttpClient, RequestOptions, ResponseHandle
from nativehttp.core.errors import (
    ConfigurationError,
    ProtocolError,
    ResolutionError,
    TransportError,
    TypeMismatchError,
    UnsupportedFeatureError,
)


__all__ = [
    "ConfigurationError",
    "NativeHttpClient",
    "ProtocolError",
    "RequestOptions",
    "ResolutionError",
    "ResponseHandle",
    "TransportError",
    "TypeMismatchError",
    "UnsupportedFeatureError",
]
