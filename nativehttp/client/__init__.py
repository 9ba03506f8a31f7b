"""Native HTTP client: request preparation and client-wide state.

This module prepares requests for a stream multiplexer with:
- DNS resolution cached per client
- Proxy selection from options or environment with no_proxy bypass
- TLS and socket options of the transport
- Redirect resolution that strips credentials across hosts
- Live telemetry and progress reporting
"""

from nativehttp.client.client import NativeHttpClient, ResponseHandle
from nativehttp.client.config import ClientConfig, RequestOptions
from nativehttp.client.context import (
    PreparedRequest,
    RequestContextBuilder,
    get_body_as_bytes,
    normalize_fingerprint,
)
from nativehttp.client.progress import NotificationCode, NotificationSink, ProgressAdapter
from nativehttp.client.protocols import StreamMultiplexer
from nativehttp.client.state import ClientState


__all__ = [
    # Client
    "NativeHttpClient",
    "ResponseHandle",
    # Config
    "ClientConfig",
    "RequestOptions",
    # Context
    "PreparedRequest",
    "RequestContextBuilder",
    "get_body_as_bytes",
    "normalize_fingerprint",
    # Progress
    "NotificationCode",
    "NotificationSink",
    "ProgressAdapter",
    # Protocols
    "StreamMultiplexer",
    # State
    "ClientState",
]
