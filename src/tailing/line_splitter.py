"""Turns a chunk of appended text into non-blank lines."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, List


def split_lines(chunk: str, terminator: str = os.linesep) -> Iterator[str]:
    """
    Yield the lines of ``chunk`` in order. A trailing fragment with no
    terminator is yielded as a line when non-empty.
    """
    if not terminator:
        raise ValueError("terminator cannot be empty")
    parts = chunk.split(terminator)
    last = parts.pop()
    yield from parts
    if last:
        yield last


def is_blank(line: str) -> bool:
    return not line or line.isspace()


def drop_blank(lines: Iterable[str]) -> Iterator[str]:
    return (line for line in lines if not is_blank(line))


class LineSplitter:
    """
    Splitter used by the tail pipeline.

    With ``hold_partial`` the unterminated tail of a chunk is kept back and
    prepended to the next chunk, so a line written across two ticks is
    emitted once, whole. A held fragment longer than ``max_pending``
    characters is released as a line so a writer that never terminates its
    lines cannot grow the buffer without bound. Without ``hold_partial``
    every chunk is split independently.
    """

    def __init__(
        self,
        terminator: str = os.linesep,
        hold_partial: bool = True,
        max_pending: int = 65536,
    ):
        if not terminator:
            raise ValueError("terminator cannot be empty")
        if max_pending <= 0:
            raise ValueError("max_pending must be positive")
        self.terminator = terminator
        self.hold_partial = hold_partial
        self.max_pending = max_pending
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def split(self, chunk: str) -> List[str]:
        if not self.hold_partial:
            return list(split_lines(chunk, self.terminator))

        text = self._pending + chunk
        # A terminator may straddle the chunk boundary ("\r" | "\n"), so the
        # fragment is only released once a full terminator follows it.
        parts = text.split(self.terminator)
        self._pending = parts.pop()
        if len(self._pending) > self.max_pending:
            parts.append(self._pending)
            self._pending = ""
        return parts

    def flush(self) -> List[str]:
        """Release the held fragment, e.g. when the session stops."""
        pending, self._pending = self._pending, ""
        return [pending] if pending else []

    def discard(self) -> None:
        self._pending = ""
