"""Redirect resolution for one top-level request.

The transport's own redirect following is always disabled; this resolver
reproduces curl and browser semantics instead: POST becomes GET on
301/302, any method becomes GET on 303, and credentials never follow a
redirect to another host.
"""

import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlunsplit

import structlog

from nativehttp.core.constants import (
    HTTP_STATUS_REDIRECT_MAX,
    HTTP_STATUS_REDIRECT_MIN,
    HTTP_STATUS_SEE_OTHER,
    METHOD_REWRITE_STATUSES,
)
from nativehttp.core.errors import ConfigurationError, TransportError
from nativehttp.core.metrics import ClientMetrics
from nativehttp.core.models import TrackedRequestInfo
from nativehttp.core.redact import redact_url_credentials
from nativehttp.core.transport import HeaderList, TransportConfig, without_headers
from nativehttp.core.urls import split_http_url
from nativehttp.network.dns import DnsResolver
from nativehttp.network.proxy import ProxySelector, configure_headers_and_proxy
from nativehttp.redirect.state_machine import RedirectState, RedirectStateMachine


if TYPE_CHECKING:
    from nativehttp.client.progress import ProgressAdapter


logger = structlog.get_logger()


class RedirectResolver:
    """Decides whether and how to follow each redirect of a request.

    Holds the redirect limit, the original host and two precomputed header
    sets: "with-auth" (everything but Host) for hops to the original host,
    and "no-auth" (also without Authorization and Cookie) for any other host.
    """

    def __init__(
        self,
        *,
        max_redirects: int,
        host: str,
        request_headers: HeaderList,
        transport: TransportConfig,
        dns: DnsResolver,
        proxy_selector: ProxySelector,
        explicit_proxy: str | None,
        no_proxy: Sequence[str],
        progress: "ProgressAdapter | None" = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the resolver.

        Args:
            max_redirects: Maximum number of redirects to follow.
            host: Host of the original request.
            request_headers: Outgoing headers of the original request.
            transport: Transport configuration, reconfigured per hop.
            dns: Resolver bound to the client's DNS cache.
            proxy_selector: Selector used to re-evaluate the proxy per hop.
            explicit_proxy: Proxy from the request options, if any.
            no_proxy: Proxy bypass rules.
            progress: Progress adapter notified on DNS resolution.
            clock: Wall clock, for redirect timing.
        """
        self._max_redirects = max_redirects
        self._host = host
        self._with_auth = without_headers(request_headers, "host")
        self._no_auth = without_headers(self._with_auth, "authorization", "cookie")
        self._transport = transport
        self._dns = dns
        self._proxy_selector = proxy_selector
        self._explicit_proxy = explicit_proxy
        self._no_proxy = list(no_proxy)
        self._progress = progress
        self._clock = clock
        self._machine = RedirectStateMachine()
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="redirect", host=host)

    @property
    def state(self) -> RedirectState:
        """Get the current redirect state."""
        return self._machine.state

    @property
    def max_redirects(self) -> int:
        """Get the redirect limit."""
        return self._max_redirects

    def decide(self, location: str | None, info: TrackedRequestInfo) -> str | None:
        """Decide whether to follow the redirect of the last response.

        ``info.http_code`` must hold the status of the response that
        carried ``location``. When the redirect is followed, the transport
        configuration is updated in place for the next hop.

        Args:
            location: Value of the Location header, if any.
            info: Telemetry of the request.

        Returns:
            URL to connect to for the next hop (host replaced by its
            resolved IP), or None when no redirect is followed.

        Raises:
            ConfigurationError: If the Location is not a usable http(s) URL.
            ResolutionError: If the host of the next hop does not resolve.
        """
        if self._machine.is_terminal:
            return None
        self._machine.begin_hop()

        if location is None or not (
            HTTP_STATUS_REDIRECT_MIN <= info.http_code < HTTP_STATUS_REDIRECT_MAX
        ):
            info.redirect_url = None
            self._machine.transition_to(RedirectState.NO_REDIRECT)
            return None

        try:
            url = urljoin(info.url, location)
        except ValueError as e:
            msg = f'Invalid redirect location "{location}": {e}.'
            error = ConfigurationError(msg, option="location")
            self._fail(error, info)
            raise error from e

        try:
            target = split_http_url(url, option="location")
        except ConfigurationError as e:
            self._fail(e, info)
            raise

        # Nothing on info changes before the target is known to be usable
        info.redirect_url = url

        if info.redirect_count >= self._max_redirects:
            self._machine.transition_to(RedirectState.REDIRECT_EXHAUSTED)
            self._metrics.record_redirect_exhausted()
            self._log.info(
                "redirect_exhausted",
                redirect_url=redact_url_credentials(url),
                max_redirects=self._max_redirects,
            )
            return None

        status = info.http_code
        info.url = url
        info.redirect_count += 1
        info.redirect_time = self._clock() - info.start_time

        self._rewrite_method(status, info)

        try:
            host, port_suffix, authority = self._dns.resolve(url, info, self._progress)
            proxy = self._proxy_selector.select(self._explicit_proxy, url)
        except TransportError as e:
            self._fail(e, info)
            raise

        self._transport.ssl.peer_name = host

        # Authorization and Cookie must not follow to another host
        headers = list(self._with_auth if host == self._host else self._no_auth)
        headers.append(("Host", f"{host}{port_suffix}"))
        proxied = configure_headers_and_proxy(
            self._transport, host, headers, proxy, self._no_proxy
        )

        self._machine.transition_to(RedirectState.REDIRECT_APPLIED)
        self._metrics.record_redirect()
        self._log.info(
            "redirect_followed",
            status_code=status,
            redirect_count=info.redirect_count,
            url=redact_url_credentials(url),
            method=info.http_method,
            cross_host=host != self._host,
            proxied=proxied,
        )

        return urlunsplit(target._replace(netloc=authority))

    def _fail(self, error: TransportError, info: TrackedRequestInfo) -> None:
        """Attribute a hop failure to the request and stop resolving."""
        info.error = error.message
        self._machine.transition_to(RedirectState.REDIRECT_FAILED)
        self._metrics.record_failure(error.error_class)
        self._log.warning(
            "redirect_failed",
            redirect_count=info.redirect_count,
            **error.to_dict(),
        )

    def _rewrite_method(self, status: int, info: TrackedRequestInfo) -> None:
        """Turn the next hop into a GET, like curl and browsers do."""
        http = self._transport.http
        if status not in METHOD_REWRITE_STATUSES:
            return
        if http.method != "POST" and status != HTTP_STATUS_SEE_OTHER:
            return

        method = "HEAD" if http.method == "HEAD" else "GET"
        info.http_method = http.method = method
        http.content = b""
        http.headers = without_headers(http.headers, "content-length", "content-type")
        # Later hops send no body either
        self._with_auth = without_headers(
            self._with_auth, "content-length", "content-type"
        )
        self._no_auth = without_headers(self._no_auth, "content-length", "content-type")
