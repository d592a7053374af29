"""Reads the region of a file appended since the previous tick."""

from __future__ import annotations

import codecs
import locale
from pathlib import Path
from typing import Optional

from errors import DecodeError, TransientReadError


def read_delta(
    path: Path,
    start: int,
    end: Optional[int] = None,
    encoding: Optional[str] = None,
    decoder: Optional[codecs.IncrementalDecoder] = None,
) -> str:
    """
    Return the text between byte ``start`` and ``end`` (or EOF when ``end`` is None).

    The file is opened read-only so concurrent writers are never blocked, and
    the handle is closed before this returns. A ``start`` past the end of the
    file (truncated since the length check) yields an empty string.
    """
    if start < 0:
        raise ValueError(f"start offset must be non-negative, got {start}")
    if end is not None and end <= start:
        return ""

    try:
        with open(path, 'rb') as f:
            f.seek(start)
            data = f.read() if end is None else f.read(end - start)
    except OSError as exc:
        raise TransientReadError(f"Cannot read {path} from offset {start}", underlying=exc) from exc

    if not data:
        return ""

    try:
        if decoder is not None:
            return decoder.decode(data)
        return data.decode(encoding or locale.getpreferredencoding(False))
    except UnicodeDecodeError as exc:
        if decoder is not None:
            decoder.reset()
        raise DecodeError(
            f"Bytes {start}-{start + len(data)} of {path} are not valid text",
            underlying=exc,
        ) from exc


class DeltaReader:
    """
    ``read_delta`` bound to one file with a decoder that survives across ticks,
    so a multi-byte character split between two ticks still decodes.
    """

    def __init__(self, path: Path, encoding: Optional[str] = None):
        self.path = path
        self.encoding = encoding or locale.getpreferredencoding(False)
        self._decoder = codecs.getincrementaldecoder(self.encoding)(errors='strict')

    def read(self, start: int, end: Optional[int] = None) -> str:
        return read_delta(self.path, start, end, decoder=self._decoder)

    def reset(self) -> None:
        self._decoder.reset()
