"""Incremental tail engine: offsets, delta reads, line splitting and debounce."""

from .debouncer import Debouncer
from .delta_reader import DeltaReader, read_delta
from .line_splitter import LineSplitter, drop_blank, is_blank, split_lines
from .offset_tracker import OffsetTracker, file_length

__all__ = [
    "Debouncer",
    "DeltaReader",
    "LineSplitter",
    "OffsetTracker",
    "drop_blank",
    "file_length",
    "is_blank",
    "read_delta",
    "split_lines",
]
