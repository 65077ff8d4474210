"""
Catalog manager test configuration.

Recording fakes for the connector host and announcement sink, plus helpers
shared by the reconciler, admin and API tests.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Tuple

import pytest

from dynamic_catalog import HostRejection, InMemoryAnnouncementSink


class RecordingHost:
    """Connector host that records calls and keeps definitions in a dict."""

    def __init__(self, reject_connectors=()):
        self.loaded: Dict[str, Tuple[str, Dict[str, str]]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.reject_connectors = set(reject_connectors)
        self._lock = threading.Lock()

    def create_connection(self, catalog_name: str, connector_name: str, properties: Mapping[str, str]) -> None:
        with self._lock:
            self.calls.append(("create", catalog_name))
            self.loaded.pop(catalog_name, None)
            if connector_name in self.reject_connectors:
                raise HostRejection(catalog_name, f"connector {connector_name} rejected")
            self.loaded[catalog_name] = (connector_name, dict(properties))

    def drop_connection(self, catalog_name: str) -> None:
        with self._lock:
            self.calls.append(("drop", catalog_name))
            self.loaded.pop(catalog_name, None)

    def is_loaded(self, catalog_name: str) -> bool:
        with self._lock:
            return catalog_name in self.loaded

    def creates(self, catalog_name: str) -> int:
        return sum(1 for op, name in self.calls if op == "create" and name == catalog_name)


class RecordingSink(InMemoryAnnouncementSink):
    def __init__(self) -> None:
        super().__init__()
        self.added: List[str] = []

    def add(self, catalog_name: str) -> None:
        self.added.append(catalog_name)
        super().add(catalog_name)


def write_catalog(directory: Path, name: str, body: str) -> Path:
    path = directory / f"{name}.properties"
    path.write_text(body, encoding="utf-8")
    return path


def wait_for(predicate: Callable[[], bool], timeout: float = 10.0, interval: float = 0.05) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    path = tmp_path / "catalog"
    path.mkdir()
    return path


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
