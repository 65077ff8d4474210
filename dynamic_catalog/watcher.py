"""Directory watcher that turns watchdog notifications into catalog events."""

from __future__ import annotations

import logging
import os
import queue
import threading
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from .errors import WatchInvalidated
from .models import CatalogEvent, EventKind, is_catalog_file_name

logger = logging.getLogger(__name__)

_STOP = object()


def _as_path(raw: Union[str, bytes]) -> str:
    return os.path.abspath(os.fsdecode(raw))


class CatalogEventHandler(FileSystemEventHandler):
    """Translates watchdog events for one directory into ``CatalogEvent`` records.

    Only direct children named ``<name>.properties`` are emitted; staging
    ``.bak`` files and everything else are dropped here. A rename is reported
    as a deletion of the old name followed by a creation of the new one.
    """

    def __init__(
        self,
        directory: Path | str,
        emit: Callable[[CatalogEvent], None],
        on_invalidated: Callable[[str], None],
    ):
        super().__init__()
        self.directory = os.path.abspath(str(directory))
        self._emit = emit
        self._on_invalidated = on_invalidated

    def _file_name(self, raw: Union[str, bytes]) -> Optional[str]:
        path = _as_path(raw)
        if os.path.dirname(path) != self.directory:
            return None
        name = os.path.basename(path)
        return name if is_catalog_file_name(name) else None

    def _forward(self, kind: EventKind, raw: Union[str, bytes]) -> None:
        name = self._file_name(raw)
        if name is not None:
            self._emit(CatalogEvent(kind, name))

    def _is_watched_directory(self, raw: Union[str, bytes]) -> bool:
        return _as_path(raw) == self.directory

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(EventKind.CREATED, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(EventKind.MODIFIED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            if self._is_watched_directory(event.src_path):
                self._on_invalidated("catalog directory deleted")
            return
        self._forward(EventKind.DELETED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            if self._is_watched_directory(event.src_path):
                self._on_invalidated("catalog directory moved")
            return
        self._forward(EventKind.DELETED, event.src_path)
        self._forward(EventKind.CREATED, event.dest_path)


class DirectoryWatcher:
    """Streams ``CatalogEvent`` records for a catalog directory.

    ``events()`` blocks until the next event and returns once the watch is
    invalidated or ``stop()`` is called. Events are delivered in the order the
    observer reports them, without reordering or debouncing.
    """

    def __init__(
        self,
        directory: Path | str,
        *,
        use_polling: bool = False,
        poll_interval: float = 1.0,
        liveness_interval: float = 0.5,
    ):
        self.directory = Path(directory)
        self.use_polling = use_polling
        self.poll_interval = poll_interval
        self.liveness_interval = liveness_interval
        self.invalidated = False
        self.invalidation_reason: Optional[str] = None

        self._queue: "queue.Queue[object]" = queue.Queue()
        self._observer = None
        self._lock = threading.Lock()
        self.handler = CatalogEventHandler(self.directory, self._queue.put, self._invalidate)

    def _build_observer(self):
        if self.use_polling:
            return PollingObserver(timeout=self.poll_interval)
        return Observer()

    def start(self) -> None:
        with self._lock:
            if self._observer is not None:
                return
            if not self.directory.is_dir():
                raise WatchInvalidated(f"Catalog directory {self.directory} does not exist")
            observer = self._build_observer()
            try:
                observer.schedule(self.handler, str(self.directory), recursive=False)
                observer.start()
            except OSError as exc:
                raise WatchInvalidated(f"Cannot watch {self.directory}: {exc}") from exc
            self._observer = observer
        logger.info("Watching catalog directory %s", self.directory)

    @property
    def observer_alive(self) -> bool:
        observer = self._observer
        return observer is not None and observer.is_alive()

    def _release_observer(self) -> None:
        with self._lock:
            observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            observer.join(timeout=5.0)

    def stop(self) -> None:
        self._release_observer()
        self._queue.put(_STOP)

    def _invalidate(self, reason: str) -> None:
        if self.invalidated:
            return
        self.invalidated = True
        self.invalidation_reason = reason
        logger.warning("Watch on %s invalidated: %s", self.directory, reason)
        self._queue.put(_STOP)

    def _check_liveness(self) -> None:
        if not self.directory.is_dir():
            self._invalidate("catalog directory no longer exists")
            return
        observer = self._observer
        if observer is not None and not observer.is_alive():
            self._invalidate("observer thread exited")

    def events(self) -> Iterator[CatalogEvent]:
        while True:
            try:
                item = self._queue.get(timeout=self.liveness_interval)
            except queue.Empty:
                self._check_liveness()
                continue
            if item is _STOP:
                if self.invalidated:
                    # consumer thread only
                    self._release_observer()
                return
            yield item  # type: ignore[misc]
