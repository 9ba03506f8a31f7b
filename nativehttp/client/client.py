"""Portable HTTP client preparing requests for a stream multiplexer."""

import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from nativehttp.client.config import ClientConfig, RequestOptions
from nativehttp.client.context import PreparedRequest, RequestContextBuilder
from nativehttp.client.protocols import StreamMultiplexer
from nativehttp.client.state import ClientState
from nativehttp.core.constants import DEFAULT_MAX_HOST_CONNECTIONS
from nativehttp.core.errors import TransportError, TypeMismatchError
from nativehttp.core.metrics import ClientMetrics
from nativehttp.core.redact import redact_url_credentials
from nativehttp.network.dns import HostLookup, system_lookup
from nativehttp.network.proxy import ProxySelector
from nativehttp.observability.logging import get_logger
from nativehttp.settings.app import ProxyEnvironment


logger = get_logger(__name__)


@dataclass
class ResponseHandle:
    """Handle on a request submitted to the stream multiplexer.

    Attributes:
        id: Identifier unique within the issuing client.
        prepared: Prepared request, including live telemetry.
        connection: Opaque handle returned by the multiplexer.
    """

    id: int
    prepared: PreparedRequest
    connection: Any

    @property
    def info(self) -> dict[str, Any]:
        """Get a snapshot of the request telemetry."""
        return self.prepared.info.snapshot()

    @property
    def gzip_enabled(self) -> bool:
        """Whether the response body must be decompressed."""
        return self.prepared.gzip_enabled


class NativeHttpClient:
    """HTTP client built on raw socket streams.

    Each request is prepared synchronously: DNS resolution (cached per
    client), proxy selection, TLS and socket options, and a redirect
    resolver. Bodies are then fetched concurrently by the multiplexer.
    """

    def __init__(
        self,
        default_options: Mapping[str, Any] | RequestOptions | None = None,
        max_host_connections: int = DEFAULT_MAX_HOST_CONNECTIONS,
        *,
        multiplexer: StreamMultiplexer,
        proxy_environment: ProxyEnvironment | None = None,
        lookup: HostLookup = system_lookup,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the client.

        Args:
            default_options: Options applied to every request.
            max_host_connections: Maximum connections to open per host;
                0 or less means unbounded.
            multiplexer: Stream multiplexer running the connections.
            proxy_environment: Fixed proxy environment; when omitted the
                process environment is re-read on every request.
            lookup: Blocking host lookup function.
            clock: Wall clock for request timestamps.
        """
        if not isinstance(default_options, RequestOptions):
            default_options = RequestOptions.model_validate(default_options or {})

        self._config = ClientConfig(
            max_host_connections=max_host_connections,
            default_options=default_options,
        )
        self._state = ClientState(
            max_host_connections=max_host_connections,
            lookup=lookup,
        )
        self._multiplexer = multiplexer
        self._builder = RequestContextBuilder(
            self._state,
            ProxySelector(proxy_environment),
            clock,
        )
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="client", client_id=self._state.id)

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def state(self) -> ClientState:
        """Get the state shared with this client's requests."""
        return self._state

    def request(
        self,
        method: str,
        url: str,
        options: Mapping[str, Any] | None = None,
    ) -> ResponseHandle:
        """Prepare a request and submit it to the multiplexer.

        Args:
            method: HTTP method.
            url: Absolute http(s) URL.
            options: Per-call options, overriding the client defaults.

        Returns:
            Handle usable with stream().

        Raises:
            TransportError: If the request cannot be prepared; nothing is
                sent in that case.
        """
        method = method.upper()
        merged = self._config.default_options.merged_with(options)

        try:
            prepared = self._builder.build(method, url, merged)
        except TransportError as e:
            self._metrics.record_failure(e.error_class)
            self._log.warning(
                "request_failed",
                method=method,
                url=redact_url_credentials(url),
                **e.to_dict(),
            )
            raise

        self._metrics.record_request(method)
        connection = self._multiplexer.open(prepared)
        handle = ResponseHandle(
            id=self._state.next_response_id(),
            prepared=prepared,
            connection=connection,
        )
        self._log.debug(
            "request_submitted",
            response_id=handle.id,
            primary_ip=prepared.info.primary_ip,
            proxy=prepared.transport.http.proxy,
        )
        return handle

    def stream(
        self,
        handles: ResponseHandle | Iterable[ResponseHandle],
        timeout: float | None = None,
    ) -> Iterator[Any]:
        """Yield response events as they arrive.

        Args:
            handles: One handle or an iterable of handles.
            timeout: Maximum idle time between events, in seconds.

        Returns:
            Iterator of events from the multiplexer.

        Raises:
            TypeMismatchError: If handles is not a handle or an iterable of
                handles.
        """
        if isinstance(handles, ResponseHandle):
            handle_list = [handles]
        elif isinstance(handles, Iterable) and not isinstance(handles, str | bytes):
            handle_list = list(handles)
            for handle in handle_list:
                if not isinstance(handle, ResponseHandle):
                    msg = (
                        "stream() expects ResponseHandle objects, "
                        f"{type(handle).__name__} given."
                    )
                    raise TypeMismatchError(msg)
        else:
            msg = (
                "stream() expects a ResponseHandle or an iterable of them, "
                f"{type(handles).__name__} given."
            )
            raise TypeMismatchError(msg)

        return self._multiplexer.poll(handle_list, timeout)
