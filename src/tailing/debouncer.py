"""Coalesces bursts of change signals into single ticks."""

from __future__ import annotations

import logging
import queue
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_SIGNAL = object()
_CLOSE = object()


class Debouncer:
    """
    Trailing-edge debounce over a thread-safe queue.

    ``signal()`` may be called from any thread (typically the notifier's).
    ``ticks()`` is consumed by a single thread and yields once per burst,
    after no signal has arrived for ``quiet_window`` seconds. ``close()``
    ends the iteration; a burst still settling at that point is dropped.
    """

    def __init__(self, quiet_window: float = 0.05):
        if quiet_window <= 0:
            raise ValueError("quiet_window must be positive")
        self.quiet_window = quiet_window
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def signal(self) -> None:
        if not self._closed:
            self._queue.put(_SIGNAL)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put(_CLOSE)

    def _next(self, timeout: Optional[float]) -> Optional[object]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def ticks(self) -> Iterator[None]:
        while True:
            item = self._next(None)
            if item is _CLOSE:
                return

            burst = 1
            while True:
                item = self._next(self.quiet_window)
                if item is None:
                    break
                if item is _CLOSE:
                    logger.debug("Debouncer closed with %d unsettled signal(s)", burst)
                    return
                burst += 1

            logger.debug("Coalesced %d signal(s) into one tick", burst)
            yield None
