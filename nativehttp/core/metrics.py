"""Metrics collection for the native HTTP client."""

from collections import Counter
from dataclasses import dataclass, field
from threading import Lock

from nativehttp.core.errors import HttpClientErrorClass


# Module-level singleton state
_metrics_instance: "ClientMetrics | None" = None
_metrics_lock: Lock = Lock()


@dataclass
class ClientMetrics:
    """Thread-safe metrics for request preparation and redirects.

    Use get_instance() for singleton access.
    """

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    requests_by_method: Counter[str] = field(default_factory=Counter)
    failures_by_class: Counter[str] = field(default_factory=Counter)
    redirects_followed: int = 0
    redirects_exhausted: int = 0
    dns_lookups: int = 0
    dns_cache_hits: int = 0
    dns_lookup_ms_total: float = 0.0

    @classmethod
    def get_instance(cls) -> "ClientMetrics":
        """Get the singleton instance (thread-safe).

        Returns:
            The shared ClientMetrics instance.
        """
        global _metrics_instance  # noqa: PLW0603
        if _metrics_instance is None:
            with _metrics_lock:
                # Double-checked locking
                if _metrics_instance is None:
                    _metrics_instance = cls()
        return _metrics_instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        global _metrics_instance  # noqa: PLW0603
        with _metrics_lock:
            _metrics_instance = None

    def record_request(self, method: str) -> None:
        """Record a prepared request.

        Args:
            method: HTTP method of the request.
        """
        with self._lock:
            self.requests_by_method[method] += 1

    def record_failure(self, error_class: HttpClientErrorClass) -> None:
        """Record a failure by classification."""
        with self._lock:
            self.failures_by_class[error_class.value] += 1

    def record_redirect(self) -> None:
        """Record a followed redirect."""
        with self._lock:
            self.redirects_followed += 1

    def record_redirect_exhausted(self) -> None:
        """Record a redirect refused because the limit was reached."""
        with self._lock:
            self.redirects_exhausted += 1

    def record_dns_lookup(self, duration_ms: float) -> None:
        """Record a blocking DNS lookup.

        Args:
            duration_ms: Wall time spent in the lookup.
        """
        with self._lock:
            self.dns_lookups += 1
            self.dns_lookup_ms_total += duration_ms

    def record_dns_cache_hit(self) -> None:
        """Record a DNS cache hit."""
        with self._lock:
            self.dns_cache_hits += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "requests_by_method": dict(self.requests_by_method),
                "failures_by_class": dict(self.failures_by_class),
                "redirects_followed": self.redirects_followed,
                "redirects_exhausted": self.redirects_exhausted,
                "dns_lookups": self.dns_lookups,
                "dns_cache_hits": self.dns_cache_hits,
                "dns_lookup_ms_total": self.dns_lookup_ms_total,
            }
