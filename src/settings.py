"""Pydantic settings for a tail session."""

from __future__ import annotations

import codecs
import locale
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TailSettings(BaseModel):
    """Tunables for one tail session. Built in code; there is no config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    quiet_window_ms: int = Field(
        default=50,
        gt=0,
        le=60_000,
        description="Debounce window: a tick fires once no change was seen for this long.",
    )
    encoding: Optional[str] = Field(
        default=None,
        description="Text encoding of the tailed file. None uses the platform default.",
        max_length=64,
    )
    line_terminator: str = Field(
        default=os.linesep,
        min_length=1,
        max_length=8,
        description="Line terminator the appended text is split on.",
    )
    hold_partial_lines: bool = Field(
        default=True,
        description="Buffer an unterminated trailing fragment until the next tick.",
    )
    max_partial_chars: int = Field(
        default=65536,
        gt=0,
        description="Longest unterminated fragment held back before it is emitted as a line.",
    )
    retry_failed_reads: bool = Field(
        default=False,
        description="Roll the offset back after a failed read so the region is read again.",
    )
    farewell: str = Field(default="ciao", max_length=200)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {value}") from exc
        return value

    @property
    def quiet_window(self) -> float:
        """Debounce window in seconds."""
        return self.quiet_window_ms / 1000.0

    def resolved_encoding(self) -> str:
        return self.encoding or locale.getpreferredencoding(False)


__all__ = ["TailSettings"]
