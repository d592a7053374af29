"""Length bookkeeping for the tailed file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from errors import TransientReadError
from models import OffsetPair

logger = logging.getLogger(__name__)


def file_length(path: Path) -> int:
    """Return the current size of ``path`` in bytes."""

    try:
        return os.stat(path).st_size
    except OSError as exc:
        raise TransientReadError(f"Cannot read length of {path}", underlying=exc) from exc


class OffsetTracker:
    """
    Remembers the file length seen on the previous tick.

    ``advance`` pairs that length with the current one and stores the current
    one as the next baseline, so consecutive pairs chain without gaps.
    """

    def __init__(self, path: Path):
        self.path = path
        self._length: Optional[int] = None

    @property
    def baseline(self) -> Optional[int]:
        return self._length

    def seed(self) -> int:
        """Record the length at subscription time. Existing content is never emitted."""
        self._length = file_length(self.path)
        logger.debug("Seeded %s at %d bytes", self.path, self._length)
        return self._length

    def advance(self) -> OffsetPair:
        if self._length is None:
            raise RuntimeError("OffsetTracker.advance() called before seed()")
        current = file_length(self.path)
        pair = OffsetPair(previous=self._length, current=current)
        self._length = current
        return pair

    def rollback(self, pair: OffsetPair) -> None:
        """Restore ``pair.previous`` as the baseline so that region is read again."""
        logger.debug("Rolling %s back to %d bytes", self.path, pair.previous)
        self._length = pair.previous
