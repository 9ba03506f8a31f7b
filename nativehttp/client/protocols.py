"""Protocol interface for the stream multiplexer."""

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from nativehttp.client.client import ResponseHandle
    from nativehttp.client.context import PreparedRequest


@runtime_checkable
class StreamMultiplexer(Protocol):
    """Drives many open connections from a single readiness-polling loop.

    The multiplexer owns the actual I/O: it opens the connection described
    by a prepared request, enforces ``max_host_connections``, feeds the
    notification sink, calls the redirect resolver on redirect-eligible
    responses and surfaces transport failures through ``info.error``.
    """

    def open(self, prepared: "PreparedRequest") -> Any:
        """Open the connection of a prepared request.

        Args:
            prepared: Request configuration, telemetry and callbacks.

        Returns:
            Opaque connection handle.
        """
        ...

    def poll(
        self,
        handles: Sequence["ResponseHandle"],
        timeout: float | None,
    ) -> Iterator[Any]:
        """Yield response events as connections become ready.

        Args:
            handles: Responses to watch.
            timeout: Maximum idle time between events, in seconds.

        Returns:
            Iterator of response events.
        """
        ...
