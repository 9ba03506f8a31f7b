"""Request context assembly: transport configuration, telemetry and callbacks."""

import importlib.util
import os
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import structlog

from nativehttp.client.config import RequestOptions
from nativehttp.client.progress import NotificationSink, ProgressAdapter
from nativehttp.client.state import ClientState
from nativehttp.core.constants import (
    CHUNK_SIZE,
    DEFAULT_FORM_CONTENT_TYPE,
    DEFAULT_HTTP_PORT,
    DEFAULT_HTTPS_PORT,
    FINGERPRINT_PIN_SHA256,
)
from nativehttp.core.errors import (
    ConfigurationError,
    ProtocolError,
    UnsupportedFeatureError,
)
from nativehttp.core.models import TrackedRequestInfo
from nativehttp.core.redact import redact_headers, redact_url_credentials
from nativehttp.core.transport import (
    HeaderList,
    HttpContextOptions,
    SocketContextOptions,
    SslContextOptions,
    TransportConfig,
    has_header,
)
from nativehttp.core.urls import split_http_url
from nativehttp.network.proxy import ProxySelector, configure_headers_and_proxy
from nativehttp.redirect.resolver import RedirectResolver


logger = structlog.get_logger()

# Only gzip is negotiated
GZIP_AVAILABLE = importlib.util.find_spec("zlib") is not None


def get_body_as_bytes(body: Any) -> bytes:
    """Normalize a request body to bytes.

    Args:
        body: Bytes, string, form mapping, readable resource, or a callable
            called with a chunk size until it returns an empty chunk.

    Returns:
        The complete body.

    Raises:
        ProtocolError: If a body callable returns a non-string chunk.
        ConfigurationError: If the body type is not supported.
    """
    if body is None:
        return b""
    if isinstance(body, bytes | bytearray | memoryview):
        return bytes(body)
    if isinstance(body, str):
        return body.encode()
    if isinstance(body, Mapping):
        return urlencode(body, doseq=True).encode()
    if hasattr(body, "read"):
        data = body.read()
        return data.encode() if isinstance(data, str) else bytes(data)
    if callable(body):
        chunks: list[bytes] = []
        while True:
            chunk = body(CHUNK_SIZE)
            if not isinstance(chunk, str | bytes):
                msg = (
                    'Return value of the "body" option callback must be string, '
                    f"{type(chunk).__name__} returned."
                )
                raise ProtocolError(msg, chunk_type=type(chunk).__name__)
            if not chunk:
                break
            chunks.append(chunk.encode() if isinstance(chunk, str) else chunk)
        return b"".join(chunks)

    msg = f'Unsupported "body" option of type {type(body).__name__}.'
    raise ConfigurationError(msg, option="body")


def normalize_fingerprint(
    fingerprint: Mapping[str, str | list[str]] | None,
) -> dict[str, str | list[str]] | None:
    """Validate the peer fingerprint option.

    Only plain certificate hashes can be verified; public-key pins are
    dropped, and rejected when they are the only entry.

    Args:
        fingerprint: Algorithm to hash mapping.

    Returns:
        Usable fingerprints, or None when pinning is not requested.

    Raises:
        ConfigurationError: If only a "pin-sha256" entry is given.
    """
    if not fingerprint:
        return None

    if FINGERPRINT_PIN_SHA256 in fingerprint and len(fingerprint) == 1:
        msg = 'Cannot verify "pin-sha256" fingerprints, please provide a "sha256" one.'
        raise ConfigurationError(msg, option="peer_fingerprint")

    return {
        algo: value
        for algo, value in fingerprint.items()
        if algo != FINGERPRINT_PIN_SHA256
    }


def is_local_bind(bindto: str | None) -> bool:
    """Check whether a bind address names a local (Unix) socket."""
    if not bindto:
        return False
    return bindto.startswith("unix://") or os.path.exists(bindto)


@dataclass
class PreparedRequest:
    """Everything the stream multiplexer needs to run a request.

    Attributes:
        url: Absolute URL as requested.
        connect_url: Same URL with the host replaced by its resolved IP.
        transport: Transport configuration of the current hop.
        info: Live telemetry of the request.
        notifications: Sink to feed with transport events.
        redirect_resolver: Called on each redirect-eligible response.
        progress: Progress adapter, when the caller passed on_progress.
        gzip_enabled: Whether the response must be decompressed.
        state: Client state shared with all requests of the client.
    """

    url: str
    connect_url: str
    options: RequestOptions
    transport: TransportConfig
    info: TrackedRequestInfo
    notifications: NotificationSink
    redirect_resolver: RedirectResolver
    progress: ProgressAdapter | None
    gzip_enabled: bool
    state: ClientState


class RequestContextBuilder:
    """Assembles transport configuration from options, DNS and proxy."""

    def __init__(
        self,
        state: ClientState,
        proxy_selector: ProxySelector | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the builder.

        Args:
            state: Client state holding the DNS cache.
            proxy_selector: Proxy selector; reads the environment if omitted.
            clock: Wall clock for request timestamps.
        """
        self._state = state
        self._dns = state.dns_resolver()
        self._proxy_selector = proxy_selector or ProxySelector()
        self._clock = clock
        self._log = logger.bind(component="context", client_id=state.id)

    def build(self, method: str, url: str, options: RequestOptions) -> PreparedRequest:
        """Prepare a request for the stream multiplexer.

        Args:
            method: HTTP method.
            url: Absolute http(s) URL.
            options: Normalized request options.

        Returns:
            Prepared request with its transport configuration.

        Raises:
            UnsupportedFeatureError: If binding to a local socket is requested.
            ConfigurationError: For invalid URL, proxy or fingerprint options.
            ProtocolError: If the body callable yields a non-string chunk.
            ResolutionError: If the host does not resolve.
        """
        scheme = split_http_url(url).scheme.lower()

        if is_local_bind(options.bindto):
            msg = "Cannot bind to local Unix sockets, bind to a network address instead."
            raise UnsupportedFeatureError(msg)

        body = get_body_as_bytes(options.body)
        fingerprint = normalize_fingerprint(options.peer_fingerprint)

        headers: HeaderList = list(options.headers.items())
        if body and method == "POST" and "content-type" not in options.headers:
            headers.append(("content-type", DEFAULT_FORM_CONTENT_TYPE))

        gzip_enabled = GZIP_AVAILABLE and "accept-encoding" not in options.headers
        if gzip_enabled:
            headers.append(("accept-encoding", "gzip"))

        info = TrackedRequestInfo(
            url=url,
            http_method=method,
            start_time=self._clock(),
            size_body=len(body),
            primary_port=DEFAULT_HTTP_PORT if scheme == "http" else DEFAULT_HTTPS_PORT,
        )
        progress = (
            ProgressAdapter(options.on_progress, info) if options.on_progress else None
        )
        notifications = NotificationSink(info, progress, self._clock)

        if options.resolve:
            self._state.dns_cache.merge_overrides(options.resolve)

        self._log.info(
            "request_started",
            method=method,
            url=redact_url_credentials(url),
            headers=redact_headers(headers),
        )

        host, port_suffix, authority = self._dns.resolve(url, info, progress)

        if not has_header(headers, "host"):
            headers.append(("host", f"{host}{port_suffix}"))

        transport = TransportConfig(
            http=HttpContextOptions(
                method=method,
                content=body,
                protocol_version=options.protocol_version,
                user_agent=options.user_agent,
                timeout=options.timeout,
            ),
            ssl=SslContextOptions(
                peer_name=host,
                verify_peer=options.verify_peer,
                verify_peer_name=options.verify_host,
                cafile=options.cafile,
                capath=options.capath,
                local_cert=options.local_cert,
                local_pk=options.local_pk,
                passphrase=options.passphrase,
                ciphers=options.ciphers,
                peer_fingerprint=fingerprint,
                capture_peer_cert_chain=options.capture_peer_cert_chain,
                # Pinned peers may present self-signed certificates
                allow_self_signed=bool(fingerprint),
            ),
            socket=SocketContextOptions(bindto=options.bindto),
        )

        proxy_selector = self._proxy_selector.refreshed()
        proxy = proxy_selector.select(options.proxy, url)
        no_proxy = proxy_selector.no_proxy

        redirect_resolver = RedirectResolver(
            max_redirects=options.max_redirects,
            host=host,
            request_headers=headers,
            transport=transport,
            dns=self._dns,
            proxy_selector=proxy_selector,
            explicit_proxy=options.proxy,
            no_proxy=no_proxy,
            progress=progress,
            clock=self._clock,
        )
        configure_headers_and_proxy(transport, host, headers, proxy, no_proxy)

        return PreparedRequest(
            url=url,
            connect_url=urlunsplit(urlsplit(url)._replace(netloc=authority)),
            options=options,
            transport=transport,
            info=info,
            notifications=notifications,
            redirect_resolver=redirect_resolver,
            progress=progress,
            gzip_enabled=gzip_enabled,
            state=self._state,
        )
