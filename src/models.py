from pathlib import Path
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class WatchTarget:
    """Absolute path of the file being tailed. Fixed for one tail session."""

    path: Path

    @classmethod
    def resolve(cls, raw: Union[str, Path]) -> "WatchTarget":
        """
        Build a target from a user supplied path. Relative paths are taken
        against the current working directory.
        """
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return cls(path=path)

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class OffsetPair:
    """Byte lengths of the file on the prior tick and on the current one."""

    previous: int
    current: int

    def __post_init__(self):
        if self.previous < 0:
            raise ValueError(f"previous length must be non-negative, got {self.previous}")
        if self.current < 0:
            raise ValueError(f"current length must be non-negative, got {self.current}")

    @property
    def delta(self) -> int:
        return self.current - self.previous

    @property
    def unchanged(self) -> bool:
        return self.current == self.previous

    @property
    def truncated(self) -> bool:
        # The file shrank between ticks; nothing here corrects for it.
        return self.current < self.previous


@dataclass
class TailStats:
    ticks: int = 0
    lines_emitted: int = 0
    skipped_ticks: int = 0
    truncations: int = 0
