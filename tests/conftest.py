"""Shared fixtures for the native HTTP client tests."""

from collections.abc import Generator, Iterator, Sequence
from typing import Any

import pytest

from nativehttp.core.metrics import ClientMetrics
from nativehttp.settings.app import ProxyEnvironment


_PROXY_VARIABLES = (
    "http_proxy",
    "HTTP_PROXY",
    "https_proxy",
    "HTTPS_PROXY",
    "all_proxy",
    "ALL_PROXY",
    "no_proxy",
    "NO_PROXY",
    "REQUEST_METHOD",
)


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLookup:
    """Host lookup backed by a static table, recording every call."""

    def __init__(self, table: dict[str, list[str]]) -> None:
        self.table = table
        self.calls: list[str] = []

    def __call__(self, host: str) -> list[str]:
        self.calls.append(host)
        return list(self.table.get(host, []))


class FakeMultiplexer:
    """Records opened requests and polled handles without doing I/O."""

    def __init__(self) -> None:
        self.opened: list[Any] = []
        self.polled: list[tuple[list[Any], float | None]] = []

    def open(self, prepared: Any) -> str:
        self.opened.append(prepared)
        return f"conn-{len(self.opened)}"

    def poll(self, handles: Sequence[Any], timeout: float | None) -> Iterator[Any]:
        self.polled.append((list(handles), timeout))
        return iter([(handle.id, "complete") for handle in handles])


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None]:
    """Reset metrics singleton before and after each test."""
    ClientMetrics.reset()
    yield
    ClientMetrics.reset()


@pytest.fixture(autouse=True)
def clean_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove proxy variables inherited from the host environment."""
    for name in _PROXY_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def lookup() -> FakeLookup:
    """Create a lookup resolving a few example hosts."""
    return FakeLookup(
        {
            "example.com": ["93.184.216.34", "93.184.216.35"],
            "api.example.com": ["10.0.0.1"],
            "other.example": ["10.0.0.2"],
            "internal.corp": ["10.1.0.1"],
        }
    )


@pytest.fixture
def multiplexer() -> FakeMultiplexer:
    """Create a fake stream multiplexer."""
    return FakeMultiplexer()


@pytest.fixture
def no_proxy_env() -> ProxyEnvironment:
    """Proxy environment without any proxy configured."""
    return ProxyEnvironment()
