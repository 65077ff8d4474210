"""Announcement sink for the datasources this node serves."""

from __future__ import annotations

import logging
import threading
from typing import List, Protocol, Set

logger = logging.getLogger(__name__)


class AnnouncementSink(Protocol):
    def add(self, catalog_name: str) -> None:
        ...

    def remove(self, catalog_name: str) -> None:
        ...


class InMemoryAnnouncementSink:
    """Thread-safe set of announced catalog names."""

    PROPERTY_NAME = "connectorIds"

    def __init__(self) -> None:
        self._names: Set[str] = set()
        self._lock = threading.Lock()

    def add(self, catalog_name: str) -> None:
        with self._lock:
            if catalog_name in self._names:
                return
            self._names.add(catalog_name)
        logger.info("Announcing datasource %s", catalog_name)

    def remove(self, catalog_name: str) -> None:
        with self._lock:
            if catalog_name not in self._names:
                return
            self._names.discard(catalog_name)
        logger.info("Withdrew datasource %s", catalog_name)

    def __contains__(self, catalog_name: object) -> bool:
        with self._lock:
            return catalog_name in self._names

    def snapshot(self) -> List[str]:
        with self._lock:
            return sorted(self._names)

    def announcement_property(self) -> str:
        """Comma-joined value published under ``connectorIds``."""
        return ",".join(self.snapshot())
