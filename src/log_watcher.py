# src/log_watcher.py
import enum
import threading
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from change_notifier import ChangeNotifier
from errors import AppError, NotifierSetupError, TailReadError, TransientReadError
from models import TailStats, WatchTarget
from settings import TailSettings
from tailing import Debouncer, DeltaReader, LineSplitter, OffsetTracker, drop_blank

logger = logging.getLogger(__name__)

LineHandler = Callable[[str], None]
NotifierFactory = Callable[[WatchTarget, Callable[[], None]], object]


class TailState(enum.Enum):
    IDLE = "idle"
    WATCHING = "watching"
    STOPPED = "stopped"


class TailPipeline:
    """
    Tails one file and calls `on_line(line)` for each non-blank line appended
    after `subscribe()`.

    Change signals are debounced and processed one tick at a time on a
    worker thread: read the new length, read the bytes between the previous
    and current length, split, drop blanks and hand each line to `on_line`.
    Failures inside a tick are logged and the tick is skipped; the session
    keeps watching until `dispose()`.
    """

    def __init__(
        self,
        path: Union[str, Path],
        on_line: LineHandler,
        settings: Optional[TailSettings] = None,
        notifier_factory: Optional[NotifierFactory] = None,
        join_timeout: float = 5.0,
    ):
        self.target = WatchTarget.resolve(path)
        self.on_line = on_line
        self.settings = settings or TailSettings()
        self.stats = TailStats()
        self.join_timeout = join_timeout
        self._notifier_factory = notifier_factory or ChangeNotifier

        self._tracker = OffsetTracker(self.target.path)
        self._reader = DeltaReader(self.target.path, self.settings.resolved_encoding())
        self._splitter = LineSplitter(
            self.settings.line_terminator,
            hold_partial=self.settings.hold_partial_lines,
            max_pending=self.settings.max_partial_chars,
        )

        self._state = TailState.IDLE
        self._state_lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._debouncer: Optional[Debouncer] = None
        self._notifier = None
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> TailState:
        return self._state

    @property
    def path(self) -> Path:
        return self.target.path

    def subscribe(self) -> "TailPipeline":
        with self._state_lock:
            if self._state is TailState.WATCHING:
                return self
            if self._state is TailState.STOPPED:
                raise RuntimeError("A stopped tail session cannot be restarted")

            try:
                self._tracker.seed()
            except TransientReadError as e:
                raise NotifierSetupError(f"Cannot open {self.path} for tailing", underlying=e) from e

            debouncer = Debouncer(self.settings.quiet_window)
            notifier = self._notifier_factory(self.target, debouncer.signal)
            try:
                notifier.start()
            except AppError:
                raise
            except Exception as e:
                raise NotifierSetupError(f"Could not watch {self.path}", underlying=e) from e

            self._debouncer = debouncer
            self._notifier = notifier
            self._thread = threading.Thread(
                target=self._run,
                name=f"tail:{self.target.name}",
                daemon=True,
            )
            self._state = TailState.WATCHING
            self._thread.start()

        logger.info("Started tailing %s", self.path)
        return self

    start = subscribe

    def dispose(self) -> None:
        """Stop watching. Safe to call more than once and from the line handler."""
        with self._state_lock:
            if self._state is TailState.STOPPED:
                return
            self._state = TailState.STOPPED
            notifier, self._notifier = self._notifier, None

        if notifier is not None:
            notifier.stop()
        if self._debouncer is not None:
            self._debouncer.close()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.join_timeout)
            if thread.is_alive():
                logger.warning("Tail worker for %s still busy after %.1fs", self.path, self.join_timeout)
        logger.info("Stopped tailing %s", self.path)

    stop = dispose

    def __enter__(self):
        return self.subscribe()

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    def _run(self):
        try:
            for _ in self._debouncer.ticks():
                try:
                    self.tick()
                except Exception:
                    self.stats.skipped_ticks += 1
                    logger.exception("Tick on %s failed; still watching", self.path)
        finally:
            with self._tick_lock:
                self._emit(drop_blank(self._splitter.flush()))

    def tick(self) -> List[str]:
        """
        Process one change: emit the non-blank lines appended since the
        previous tick and return them.
        """
        with self._tick_lock:
            self.stats.ticks += 1
            try:
                pair = self._tracker.advance()
            except TransientReadError as e:
                self.stats.skipped_ticks += 1
                logger.warning("Skipping tick: %s", e)
                return []

            if pair.truncated:
                self.stats.truncations += 1
                logger.warning(
                    "%s shrank from %d to %d bytes; content before the shrink is not re-read",
                    self.path, pair.previous, pair.current,
                )
                # Held text belongs to the old content.
                self._splitter.discard()
                self._reader.reset()
            if pair.current <= pair.previous:
                return []

            try:
                chunk = self._reader.read(pair.previous, pair.current)
            except TailReadError as e:
                self.stats.skipped_ticks += 1
                logger.warning("Skipping tick for bytes %d-%d: %s", pair.previous, pair.current, e)
                if self.settings.retry_failed_reads and isinstance(e, TransientReadError):
                    self._tracker.rollback(pair)
                return []

            return self._emit(drop_blank(self._splitter.split(chunk)))

    def _emit(self, lines: Iterable[str]) -> List[str]:
        emitted = []
        for line in lines:
            try:
                self.on_line(line)
            except Exception:
                logger.exception("Line handler failed for %r", line)
                continue
            self.stats.lines_emitted += 1
            emitted.append(line)
        return emitted


def watch(
    path: Union[str, Path],
    on_line: LineHandler,
    settings: Optional[TailSettings] = None,
    notifier_factory: Optional[NotifierFactory] = None,
) -> TailPipeline:
    """Create a pipeline for `path` and subscribe it."""
    return TailPipeline(path, on_line, settings=settings, notifier_factory=notifier_factory).subscribe()
