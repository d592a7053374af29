# src/change_notifier.py

import logging
import os
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from errors import NotifierSetupError
from models import WatchTarget

logger = logging.getLogger(__name__)


def _normalize(path) -> str:
    return os.path.normcase(os.path.abspath(os.fsdecode(path)))


class TargetFileHandler(FileSystemEventHandler):
    """
    Forwards a bare "changed" signal for events that touch the watch target.
    Other files in the directory are ignored.
    """

    def __init__(self, target: WatchTarget, on_change: Callable[[], None]):
        super().__init__()
        self.target = target
        self.on_change = on_change
        self._target_path = _normalize(target.path)

    def _matches(self, path) -> bool:
        return bool(path) and _normalize(path) == self._target_path

    def _forward(self, event: FileSystemEvent):
        if event.is_directory:
            return
        if self._matches(event.src_path) or self._matches(getattr(event, 'dest_path', '')):
            logger.debug("%s event on %s", event.event_type, self.target.path)
            self.on_change()

    def on_modified(self, event):
        self._forward(event)

    def on_created(self, event):
        self._forward(event)

    def on_moved(self, event):
        self._forward(event)


class ChangeNotifier:
    """
    Watches the target's directory with a watchdog observer and calls
    `on_change()` each time the target is written. Signals may be bursty or
    duplicated; the caller debounces them.
    """

    def __init__(
        self,
        target: WatchTarget,
        on_change: Callable[[], None],
        observer_factory: Callable[[], Observer] = Observer,
    ):
        self.target = target
        self.handler = TargetFileHandler(target, on_change)
        self._observer_factory = observer_factory
        self._observer: Optional[Observer] = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        directory = self.target.directory
        if not directory.is_dir():
            raise NotifierSetupError(f"Directory to watch does not exist: {directory}")

        observer = self._observer_factory()
        try:
            observer.schedule(self.handler, str(directory), recursive=False)
            observer.start()
        except Exception as e:
            logger.exception("Failed to start file watcher on %s", directory)
            raise NotifierSetupError(f"Could not watch {directory}", underlying=e) from e

        self._observer = observer
        logger.info("Watching %s for changes to %s", directory, self.target.name)

    def stop(self) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=2)
        logger.info("Stopped watching %s", self.target.path)
