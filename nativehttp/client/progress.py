"""Live request statistics: transport notifications and progress reporting."""

import time
from collections.abc import Callable
from enum import IntEnum

from nativehttp.client.config import ProgressCallback
from nativehttp.core.models import TrackedRequestInfo


class NotificationCode(IntEnum):
    """Event codes emitted by the transport while a hop runs."""

    RESOLVE = 1
    CONNECT = 2
    AUTH_REQUIRED = 3
    MIME_TYPE_IS = 4
    FILE_SIZE_IS = 5
    REDIRECTED = 6
    PROGRESS = 7
    COMPLETED = 8
    FAILURE = 9


class ProgressAdapter:
    """Forwards deduplicated progress to the caller's callback.

    The last non-zero (transferred, total) pair is memoized so that calls
    made while no network transfer happens still report meaningful values.
    """

    def __init__(self, callback: ProgressCallback, info: TrackedRequestInfo) -> None:
        """Initialize the adapter.

        Args:
            callback: Caller callback receiving (transferred, total, info).
            info: Telemetry of the request, snapshotted on each call.
        """
        self._callback = callback
        self._info = info
        self._last = (0, 0)

    @property
    def last(self) -> tuple[int, int]:
        """Get the last reported (transferred, total) pair."""
        return self._last

    def update(self, transferred: int, total: int) -> None:
        """Report transfer progress.

        Args:
            transferred: Bytes transferred so far.
            total: Expected total, 0 when unknown.
        """
        if transferred or total:
            self._last = (transferred, total)
        self._emit()

    def dns_resolved(self) -> None:
        """Signal a DNS resolution checkpoint."""
        self._emit()

    def tick(self) -> None:
        """Re-report the last pair while the connection is idle."""
        self._emit()

    def complete(self) -> None:
        """Report completion with the largest counter observed."""
        self._last = (max(self._last), self._last[1])
        self._emit()

    def _emit(self) -> None:
        transferred, total = self._last
        self._callback(transferred, total, self._info.snapshot(for_progress=True))


class NotificationSink:
    """Computes live statistics from transport notifications.

    Always registered, whether or not the caller asked for progress.
    """

    def __init__(
        self,
        info: TrackedRequestInfo,
        progress: ProgressAdapter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._info = info
        self._progress = progress
        self._clock = clock

    def notify(self, code: int, transferred: int = 0, total: int = 0) -> None:
        """Handle one transport notification.

        Args:
            code: Notification code.
            transferred: Bytes downloaded so far (progress events).
            total: Expected download size, 0 when unknown.
        """
        info = self._info
        now = self._clock()
        info.total_time = now - info.start_time

        if code == NotificationCode.PROGRESS:
            # The request body is fully sent before any byte comes back
            if not transferred:
                info.size_upload = info.size_body
            info.size_download = transferred
        elif code == NotificationCode.CONNECT:
            info.connect_time += now - info.fopen_time
        else:
            return

        if self._progress is not None:
            self._progress.update(transferred, total)
