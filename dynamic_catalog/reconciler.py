"""Reconciles the catalog directory with the connector host and announcements."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional

from .announcement import AnnouncementSink
from .errors import CatalogError, MissingConnectorName, WatchInvalidated
from .host import ConnectorHost
from .models import (
    CONNECTOR_NAME_KEY,
    CatalogDefinition,
    CatalogEvent,
    DatasourceAction,
    EventKind,
    validate_catalog_name,
)
from .store import CatalogStore
from .watcher import DirectoryWatcher

logger = logging.getLogger(__name__)

WatcherFactory = Callable[[Path], DirectoryWatcher]


class AtomicFlag:
    """Boolean with compare-and-set semantics."""

    def __init__(self, value: bool = False):
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> bool:
        with self._lock:
            return self._value

    def set(self, value: bool) -> None:
        with self._lock:
            self._value = value

    def compare_and_set(self, expected: bool, new: bool) -> bool:
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True


class CatalogReconciler:
    """Loads catalogs once at startup, then follows directory events.

    Every event is treated as authoritative: creates delegate drop-then-create
    to the host and deletes of unknown names are no-ops, so events caused by
    our own store writes and duplicate watcher notifications are harmless.
    """

    def __init__(
        self,
        store: CatalogStore,
        host: ConnectorHost,
        announcements: AnnouncementSink,
        disabled_catalogs: Iterable[str] = (),
        watcher_factory: Optional[WatcherFactory] = None,
    ):
        self.store = store
        self.host = host
        self.announcements = announcements
        self.disabled_catalogs = frozenset(disabled_catalogs)
        self._watcher_factory = watcher_factory or DirectoryWatcher
        self._catalogs_loading = AtomicFlag()
        self._catalogs_loaded = AtomicFlag()
        self._watcher: Optional[DirectoryWatcher] = None
        self._watcher_thread: Optional[threading.Thread] = None
        self._watcher_lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Latch

    def is_loading(self) -> bool:
        return self._catalogs_loading.get()

    def are_catalogs_loaded(self) -> bool:
        return self._catalogs_loaded.get()

    # ------------------------------------------------------------------ #
    # Initial load

    def load_all(
        self,
        extra: Optional[Mapping[str, Mapping[str, str]]] = None,
        start_watcher: bool = True,
    ) -> bool:
        """Load every catalog file plus ``extra`` in-memory definitions.

        Runs at most once per reconciler; later calls return ``False``
        immediately. Per-catalog failures are logged and skipped.
        """
        if not self._catalogs_loading.compare_and_set(False, True):
            logger.info("Catalog load already started; skipping")
            return False

        loaded = 0
        failed = 0
        for name in self.store.list_catalog_names():
            if self._load_from_disk(name):
                loaded += 1
            else:
                failed += 1

        for name, definition in (extra or {}).items():
            if self._safe_create(name, dict(definition)):
                loaded += 1
            else:
                failed += 1

        self._catalogs_loaded.set(True)
        logger.info("Initial catalog load finished: %d processed, %d failed", loaded, failed)

        if start_watcher:
            self.start_watcher()
        return True

    # ------------------------------------------------------------------ #
    # Host primitives

    def apply_create(self, name: str, definition: CatalogDefinition) -> None:
        validate_catalog_name(name)
        if name in self.disabled_catalogs:
            logger.info("Skipping disabled catalog %s", name)
            return

        logger.info("Loading catalog %s", name)
        connector_name = None
        connector_properties: Dict[str, str] = {}
        for key, value in definition.items():
            if key == CONNECTOR_NAME_KEY:
                connector_name = value
            else:
                connector_properties[key] = value

        try:
            if connector_name is None:
                raise MissingConnectorName(name)
            self.host.create_connection(name, connector_name, connector_properties)
        except Exception:
            self._retract(name)
            raise

        self._announce(name, DatasourceAction.ADD)
        logger.info("Added catalog %s using connector %s", name, connector_name)

    def apply_delete(self, name: str) -> None:
        if not self.host.is_loaded(name):
            logger.info("Catalog %s is not loaded; nothing to remove from host", name)
        else:
            logger.info("Removing catalog %s", name)
        self.host.drop_connection(name)
        self._announce(name, DatasourceAction.DELETE)

    def _retract(self, name: str) -> None:
        if self.host.is_loaded(name):
            self.host.drop_connection(name)
        self._announce(name, DatasourceAction.DELETE)

    def _announce(self, name: str, action: DatasourceAction) -> None:
        if action is DatasourceAction.ADD:
            self.announcements.add(name)
        else:
            self.announcements.remove(name)

    def _safe_create(self, name: str, definition: CatalogDefinition) -> bool:
        try:
            self.apply_create(name, definition)
        except CatalogError as exc:
            logger.warning("Catalog %s not loaded: %s", name, exc)
            return False
        except Exception:
            logger.error("Unexpected failure loading catalog %s", name, exc_info=True)
            return False
        return True

    def _load_from_disk(self, name: str) -> bool:
        try:
            definition = self.store.read(name)
        except CatalogError as exc:
            logger.warning("Cannot parse catalog file for %s: %s", name, exc)
            return False
        except OSError as exc:
            logger.warning("Cannot read catalog file for %s: %s", name, exc)
            return False
        return self._safe_create(name, definition)

    # ------------------------------------------------------------------ #
    # Steady state

    def handle_event(self, event: CatalogEvent) -> None:
        """Apply one directory event. Never raises."""
        logger.info("Catalog directory event %s: %s", event.kind.value, event.file_name)
        try:
            name = event.catalog_name
            if event.kind is EventKind.CREATED:
                self._load_from_disk(name)
            elif event.kind is EventKind.MODIFIED:
                self.apply_delete(name)
                self._load_from_disk(name)
            elif event.kind is EventKind.DELETED:
                self.apply_delete(name)
        except Exception:
            logger.error("Failed to apply %s for %s", event.kind.value, event.file_name, exc_info=True)

    def run_event_loop(self, events: Iterable[CatalogEvent]) -> None:
        for event in events:
            self.handle_event(event)

    # ------------------------------------------------------------------ #
    # Watcher lifecycle

    @property
    def watcher_running(self) -> bool:
        thread = self._watcher_thread
        return thread is not None and thread.is_alive()

    def start_watcher(self) -> None:
        if not self.are_catalogs_loaded():
            raise RuntimeError("Catalog watcher can only start after the initial load")
        with self._watcher_lock:
            if self._watcher is not None:
                return
            watcher = self._watcher_factory(self.store.base_dir)
            try:
                watcher.start()
            except WatchInvalidated as exc:
                logger.error("Catalog watcher not started: %s", exc)
                return
            self._watcher = watcher
            self._watcher_thread = threading.Thread(
                target=self._watch_loop,
                args=(watcher,),
                name="catalog-watcher",
                daemon=True,
            )
            self._watcher_thread.start()

    def _watch_loop(self, watcher: DirectoryWatcher) -> None:
        logger.info("Catalog watcher thread started")
        self.run_event_loop(watcher.events())
        if watcher.invalidated:
            watcher.stop()
            with self._watcher_lock:
                if self._watcher is watcher:
                    self._watcher = None
            logger.warning(
                "Catalog watcher stopped (%s); dynamic catalog updates are disabled",
                watcher.invalidation_reason,
            )
        else:
            logger.info("Catalog watcher thread stopped")

    def close(self, timeout: float = 5.0) -> None:
        with self._watcher_lock:
            watcher, self._watcher = self._watcher, None
            thread, self._watcher_thread = self._watcher_thread, None
        if watcher is not None:
            watcher.stop()
        if thread is not None:
            thread.join(timeout=timeout)
