"""Transport configuration handed to the stream multiplexer.

The configuration is split like a socket stream context: an ``http``
section for the request line and headers, an ``ssl`` section for TLS
parameters and a ``socket`` section for low-level socket options. The
redirect resolver mutates it in place between hops.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field


HeaderList = list[tuple[str, str]]


def without_headers(headers: Iterable[tuple[str, str]], *names: str) -> HeaderList:
    """Drop headers by name.

    Args:
        headers: Header pairs.
        names: Header names to remove (case-insensitive).

    Returns:
        New list without the named headers.
    """
    dropped = {name.lower() for name in names}
    return [(name, value) for name, value in headers if name.lower() not in dropped]


def has_header(headers: Iterable[tuple[str, str]], name: str) -> bool:
    """Check whether a header is present (case-insensitive)."""
    wanted = name.lower()
    return any(key.lower() == wanted for key, _ in headers)


@dataclass
class HttpContextOptions:
    """Request-level options of the transport.

    Attributes:
        follow_location: Always False; redirects are resolved by the client.
        auto_decode: Always False; chunked decoding is incompatible with
            readiness polling.
        proxy: Transport URL of the proxy for the current hop, if any.
        request_fulluri: Send absolute-form request targets (proxy hops).
    """

    method: str
    content: bytes = b""
    headers: HeaderList = field(default_factory=list)
    protocol_version: str = "1.1"
    user_agent: str = ""
    timeout: float | None = None
    ignore_errors: bool = True
    follow_location: bool = False
    auto_decode: bool = False
    proxy: str | None = None
    request_fulluri: bool = False


@dataclass
class SslContextOptions:
    """TLS options of the transport.

    ``verify_peer`` and ``verify_peer_name`` are passed through independently
    even when inconsistent.
    """

    peer_name: str
    verify_peer: bool = True
    verify_peer_name: bool = True
    cafile: str | None = None
    capath: str | None = None
    local_cert: str | None = None
    local_pk: str | None = None
    passphrase: str | None = None
    ciphers: str | None = None
    peer_fingerprint: dict[str, str | list[str]] | None = None
    capture_peer_cert_chain: bool = False
    allow_self_signed: bool = False
    sni_enabled: bool = True
    disable_compression: bool = True


@dataclass
class SocketContextOptions:
    """Socket options of the transport."""

    bindto: str | None = None
    tcp_nodelay: bool = True


@dataclass
class TransportConfig:
    """Complete transport configuration for the current hop."""

    http: HttpContextOptions
    ssl: SslContextOptions
    socket: SocketContextOptions = field(default_factory=SocketContextOptions)
