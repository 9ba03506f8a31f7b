"""Blocking DNS resolution with a per-client cache."""

import ipaddress
import socket
import time
from collections.abc import Callable, Mapping
from threading import Lock
from typing import TYPE_CHECKING, NamedTuple
from urllib.parse import urlsplit

import structlog

from nativehttp.core.constants import DEFAULT_HTTP_PORT, DEFAULT_HTTPS_PORT
from nativehttp.core.errors import ResolutionError
from nativehttp.core.metrics import ClientMetrics
from nativehttp.core.models import TrackedRequestInfo


if TYPE_CHECKING:
    from nativehttp.client.progress import ProgressAdapter


logger = structlog.get_logger()

HostLookup = Callable[[str], list[str]]


def system_lookup(host: str) -> list[str]:
    """Resolve a host name to its IPv4 addresses.

    IP literals are returned as-is without touching the resolver.

    Args:
        host: Host name or IP literal.

    Returns:
        Addresses in resolver order, empty if the name does not resolve.
    """
    try:
        return [str(ipaddress.ip_address(host))]
    except ValueError:
        pass

    try:
        _, _, addresses = socket.gethostbyname_ex(host)
    except (OSError, UnicodeError):
        # UnicodeError: IDNA encoding rejects empty or over-long labels
        return []
    return addresses


class ResolvedAuthority(NamedTuple):
    """Outcome of resolving the authority of a URL.

    Attributes:
        host: Original host name, still used for SNI and the Host header.
        port_suffix: ``":<port>"`` when the URL names a port, else empty.
        authority: URL authority with the host replaced by the resolved IP.
    """

    host: str
    port_suffix: str
    authority: str


class DnsCache:
    """Host to IP mapping shared by every request of one client.

    Entries are written once and never invalidated. Concurrent misses for
    the same host may both resolve; the first write wins.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = Lock()

    def get(self, host: str) -> str | None:
        """Get the cached address for a host."""
        return self._entries.get(host)

    def add(self, host: str, ip: str) -> str:
        """Insert an address unless the host is already cached.

        Args:
            host: Host name.
            ip: Resolved address.

        Returns:
            The address now cached for the host.
        """
        with self._lock:
            return self._entries.setdefault(host, ip)

    def merge_overrides(self, overrides: Mapping[str, str]) -> None:
        """Merge caller-provided host to IP overrides.

        Overrides take precedence over previously cached entries.

        Args:
            overrides: Host name to IP mapping.
        """
        with self._lock:
            self._entries.update(overrides)

    def __contains__(self, host: object) -> bool:
        return host in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, str]:
        """Return a copy of the cached entries."""
        with self._lock:
            return dict(self._entries)


class DnsResolver:
    """Resolves URL hosts through a DnsCache, recording lookup telemetry."""

    def __init__(self, cache: DnsCache, lookup: HostLookup = system_lookup) -> None:
        """Initialize the resolver.

        Args:
            cache: Client-wide DNS cache.
            lookup: Blocking host lookup function.
        """
        self._cache = cache
        self._lookup = lookup
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="dns")

    @property
    def cache(self) -> DnsCache:
        """Get the underlying cache."""
        return self._cache

    def resolve(
        self,
        url: str,
        info: TrackedRequestInfo,
        progress: "ProgressAdapter | None" = None,
    ) -> ResolvedAuthority:
        """Resolve the host of a URL, using the cache when possible.

        Args:
            url: Absolute URL of the hop.
            info: Request telemetry, updated with port, IP and lookup time.
            progress: Progress adapter notified once the host is resolved.

        Returns:
            Host, port suffix and authority with the IP substituted.

        Raises:
            ResolutionError: If the host resolves to no address.
        """
        parts = urlsplit(url)
        host = parts.hostname or ""

        if parts.port is not None:
            info.primary_port = parts.port
            port_suffix = f":{parts.port}"
        else:
            info.primary_port = (
                DEFAULT_HTTP_PORT if parts.scheme == "http" else DEFAULT_HTTPS_PORT
            )
            port_suffix = ""

        ip = self._cache.get(host)
        if ip is None:
            started = time.perf_counter()
            addresses = self._lookup(host) if host else []
            if not addresses:
                self._log.warning("dns_resolution_failed", host=host)
                raise ResolutionError(host)

            elapsed = time.perf_counter() - started
            info.namelookup_time += elapsed
            self._metrics.record_dns_lookup(elapsed * 1000)
            ip = self._cache.add(host, addresses[0])
            self._log.debug("dns_resolved", host=host, ip=ip, candidates=len(addresses))
        else:
            self._metrics.record_dns_cache_hit()
            self._log.debug("dns_cache_hit", host=host, ip=ip)

        info.primary_ip = ip

        if progress is not None:
            progress.dns_resolved()

        userinfo, _, _ = parts.netloc.rpartition("@")
        prefix = f"{userinfo}@" if userinfo else ""
        address = f"[{ip}]" if ":" in ip else ip
        return ResolvedAuthority(host, port_suffix, f"{prefix}{address}{port_suffix}")
