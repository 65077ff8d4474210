from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import List

import pytest
from watchdog.events import (
    DirDeletedEvent,
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from dynamic_catalog import CatalogEvent, CatalogEventHandler, DirectoryWatcher, EventKind, WatchInvalidated

from conftest import wait_for


class _Collector:
    def __init__(self) -> None:
        self.events: List[CatalogEvent] = []
        self.invalidations: List[str] = []


def _drain(watcher: DirectoryWatcher, sink: List[CatalogEvent]) -> None:
    for event in watcher.events():
        sink.append(event)


def _handler(directory: Path) -> tuple[CatalogEventHandler, _Collector]:
    collector = _Collector()
    handler = CatalogEventHandler(directory, collector.events.append, collector.invalidations.append)
    return handler, collector


def test_handler_maps_file_events(catalog_dir: Path):
    handler, collector = _handler(catalog_dir)
    path = str(catalog_dir / "mysql1.properties")

    handler.dispatch(FileCreatedEvent(path))
    handler.dispatch(FileModifiedEvent(path))
    handler.dispatch(FileDeletedEvent(path))

    assert collector.events == [
        CatalogEvent(EventKind.CREATED, "mysql1.properties"),
        CatalogEvent(EventKind.MODIFIED, "mysql1.properties"),
        CatalogEvent(EventKind.DELETED, "mysql1.properties"),
    ]
    assert collector.events[0].catalog_name == "mysql1"


def test_handler_filters_staging_and_foreign_entries(catalog_dir: Path):
    handler, collector = _handler(catalog_dir)

    handler.dispatch(FileCreatedEvent(str(catalog_dir / "p1.bak")))
    handler.dispatch(FileModifiedEvent(str(catalog_dir / "p1.bak")))
    handler.dispatch(FileCreatedEvent(str(catalog_dir / ".p1.properties")))
    handler.dispatch(FileCreatedEvent(str(catalog_dir / "readme.txt")))
    handler.dispatch(FileCreatedEvent(str(catalog_dir / "nested" / "p2.properties")))
    handler.dispatch(DirModifiedEvent(str(catalog_dir)))

    assert collector.events == []
    assert collector.invalidations == []


def test_staging_rename_surfaces_as_creation(catalog_dir: Path):
    handler, collector = _handler(catalog_dir)

    handler.dispatch(FileMovedEvent(str(catalog_dir / "p1.bak"), str(catalog_dir / "p1.properties")))
    handler.dispatch(FileMovedEvent(str(catalog_dir / "p2.properties"), str(catalog_dir / "p3.properties")))

    assert collector.events == [
        CatalogEvent(EventKind.CREATED, "p1.properties"),
        CatalogEvent(EventKind.DELETED, "p2.properties"),
        CatalogEvent(EventKind.CREATED, "p3.properties"),
    ]


def test_deleting_watched_directory_invalidates(catalog_dir: Path):
    handler, collector = _handler(catalog_dir)

    handler.dispatch(DirDeletedEvent(str(catalog_dir / "child")))
    assert collector.invalidations == []

    handler.dispatch(DirDeletedEvent(str(catalog_dir)))
    assert collector.invalidations == ["catalog directory deleted"]


def test_start_requires_existing_directory(tmp_path: Path):
    watcher = DirectoryWatcher(tmp_path / "missing")
    with pytest.raises(WatchInvalidated):
        watcher.start()


def test_stop_ends_event_stream(catalog_dir: Path):
    watcher = DirectoryWatcher(catalog_dir, use_polling=True, poll_interval=0.1, liveness_interval=0.1)
    watcher.start()
    watcher.stop()

    assert list(watcher.events()) == []
    assert not watcher.invalidated


def test_stream_ends_when_directory_disappears(catalog_dir: Path):
    watcher = DirectoryWatcher(catalog_dir, use_polling=True, poll_interval=0.1, liveness_interval=0.1)
    watcher.start()
    observer = watcher._observer
    drained: List[CatalogEvent] = []
    consumer = threading.Thread(target=_drain, args=(watcher, drained), daemon=True)
    consumer.start()

    shutil.rmtree(catalog_dir)
    consumer.join(timeout=10.0)

    assert not consumer.is_alive()
    assert watcher.invalidated
    assert not watcher.observer_alive
    assert not observer.is_alive()
    watcher.stop()


def test_observer_reports_new_catalog_files(catalog_dir: Path):
    watcher = DirectoryWatcher(catalog_dir, use_polling=True, poll_interval=0.1, liveness_interval=0.1)
    watcher.start()
    seen: List[CatalogEvent] = []
    consumer = threading.Thread(target=_drain, args=(watcher, seen), daemon=True)
    consumer.start()
    try:
        (catalog_dir / "ignored.bak").write_text("connector.name=memory", encoding="utf-8")
        (catalog_dir / "live.properties").write_text("connector.name=memory", encoding="utf-8")
        assert wait_for(lambda: CatalogEvent(EventKind.CREATED, "live.properties") in seen)
    finally:
        watcher.stop()
        consumer.join(timeout=5.0)

    assert all(event.file_name.endswith(".properties") for event in seen)
