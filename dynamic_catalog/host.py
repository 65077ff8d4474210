"""Connector host interface and the in-process reference host."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Mapping, Optional, Protocol

from .connectors.base import BaseConnector, ConnectorSpec
from .connectors.registry import ConnectorFactory
from .errors import HostRejection

logger = logging.getLogger(__name__)


class ConnectorHost(Protocol):
    """Query-engine side of the reconciler. Implementations must be thread-safe and idempotent."""

    def create_connection(self, catalog_name: str, connector_name: str, properties: Mapping[str, str]) -> None:
        ...

    def drop_connection(self, catalog_name: str) -> None:
        ...

    def is_loaded(self, catalog_name: str) -> bool:
        ...


class LocalConnectorHost:
    """Keeps live connectors in a dict keyed by catalog name.

    ``create_connection`` on a name that is already mounted closes the old
    connector first, so a failed re-create leaves the catalog unmounted.
    """

    def __init__(self, factory: Optional[ConnectorFactory] = None):
        self.factory = factory or ConnectorFactory()
        self._connectors: Dict[str, BaseConnector] = {}
        self._lock = threading.RLock()

    def create_connection(self, catalog_name: str, connector_name: str, properties: Mapping[str, str]) -> None:
        spec = ConnectorSpec(catalog_name=catalog_name, connector_name=connector_name, properties=dict(properties))
        with self._lock:
            self.drop_connection(catalog_name)
            try:
                connector = self.factory.create(spec)
            except Exception as exc:
                raise HostRejection(catalog_name, str(exc)) from exc
            self._connectors[catalog_name] = connector
        logger.debug("Mounted connector %s for catalog %s", connector_name, catalog_name)

    def drop_connection(self, catalog_name: str) -> None:
        with self._lock:
            connector = self._connectors.pop(catalog_name, None)
        if connector is None:
            return
        try:
            connector.close()
        except Exception as exc:
            logger.warning("Error closing connector for catalog %s: %s", catalog_name, exc)

    def is_loaded(self, catalog_name: str) -> bool:
        with self._lock:
            return catalog_name in self._connectors

    def connector(self, catalog_name: str) -> Optional[BaseConnector]:
        with self._lock:
            return self._connectors.get(catalog_name)

    def catalogs(self) -> List[str]:
        with self._lock:
            return sorted(self._connectors)

    def close(self) -> None:
        for name in self.catalogs():
            self.drop_connection(name)
