# src/display.py

import sys
import threading
from dataclasses import dataclass
from typing import Optional, Sequence, TextIO, Tuple

from colorama import Back, Fore, Style


@dataclass(frozen=True)
class SeverityStyle:
    fg: str
    bg: str

    def apply(self, text: str) -> str:
        return f"{self.fg}{self.bg}{text}{Style.RESET_ALL}"


StyleTable = Sequence[Tuple[str, SeverityStyle]]

# Checked in order; the first tag found in a line wins.
DEFAULT_STYLES: Tuple[Tuple[str, SeverityStyle], ...] = (
    ("error", SeverityStyle(Fore.BLACK, Back.RED)),
    ("warning", SeverityStyle(Fore.BLACK, Back.YELLOW)),
    ("info", SeverityStyle(Fore.WHITE, Back.GREEN)),
)
DEFAULT_STYLE = SeverityStyle(Fore.BLACK, Back.WHITE)


class ColorSink:
    """
    Writes log lines to a terminal, colored by the first bracketed severity
    tag (`[error]`, `[warning]`, ...) found in the line. Tag matching is
    case-sensitive.
    """

    def __init__(
        self,
        styles: StyleTable = DEFAULT_STYLES,
        default: SeverityStyle = DEFAULT_STYLE,
        stream: Optional[TextIO] = None,
    ):
        self.styles = tuple((f"[{tag}]", style) for tag, style in styles)
        self.default = default
        self.stream = stream or sys.stdout
        self._lock = threading.Lock()

    def style_for(self, line: str) -> SeverityStyle:
        for marker, style in self.styles:
            if marker in line:
                return style
        return self.default

    def render(self, line: str) -> None:
        text = self.style_for(line).apply(line)
        with self._lock:
            self.stream.write(text + "\n")
            self.stream.flush()
