"""Config file watching for live reloads.

Uses watchdog so an edited ``config.toml`` takes effect without a restart.
Callbacks run on the observer thread; hand them to the UI thread with
``App.call_from_thread``.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers.polling import PollingObserver

logger = logging.getLogger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Handles file system events for a single config file."""

    def __init__(self, path: Path, on_change: Callable[[Path], None]):
        super().__init__()
        self.path = path.resolve()
        self.on_change = on_change

    def _matches(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(p).resolve() == self.path for p in paths)

    def on_modified(self, event):
        if self._matches(event):
            self.on_change(self.path)

    def on_created(self, event):
        if self._matches(event):
            self.on_change(self.path)

    def on_moved(self, event):
        # Editors that save through a temp file end with a move onto the path
        if self._matches(event):
            self.on_change(self.path)


class ConfigWatcher:
    """Watches the config file and reports changes."""

    def __init__(self, path: Path, on_change: Callable[[Path], None], poll_interval: float = 1.0):
        self.path = path
        self.on_change = on_change
        self.poll_interval = poll_interval
        self._observer: Optional[PollingObserver] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> bool:
        """Start the watcher. Returns False if the config directory is missing."""
        with self._lock:
            if self._observer is not None:
                return True
            directory = self.path.parent
            if not directory.exists():
                logger.debug("Not watching %s: directory missing", self.path)
                return False

            # Polling keeps latency predictable across platforms
            self._observer = PollingObserver(timeout=self.poll_interval)
            handler = ConfigFileHandler(self.path, self.on_change)
            self._observer.schedule(handler, str(directory), recursive=False)
            self._observer.start()
            logger.debug("Watching %s", self.path)
            return True

    def stop(self) -> None:
        """Stop the watcher."""
        with self._lock:
            if self._observer:
                self._observer.stop()
                self._observer.join(timeout=1.0)
                self._observer = None
