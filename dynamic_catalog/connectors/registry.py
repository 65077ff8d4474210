"""Connector factory keyed by ``connector.name``."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List

from .base import BaseConnector, ConnectorSpec
from .postgres_node import PostgresCatalogConnector
from .remote_stub import HTTPAPIConnectorStub, JDBCConnectorStub, MemoryConnector
from .sqlite_node import SQLiteCatalogConnector

ConnectorBuilder = Callable[[ConnectorSpec], BaseConnector]


class ConnectorFactory:
    """Instantiate connectors by connector name without coupling the host to them."""

    def __init__(self, register_builtins: bool = True):
        self._builders: Dict[str, ConnectorBuilder] = {}
        self._lock = threading.Lock()
        if register_builtins:
            self.register("sqlite", SQLiteCatalogConnector)
            self.register("postgresql", PostgresCatalogConnector)
            self.register("postgres", PostgresCatalogConnector)
            for name in ("mysql", "oracle", "sqlserver"):
                self.register(name, JDBCConnectorStub)
            self.register("http", HTTPAPIConnectorStub)
            self.register("memory", MemoryConnector)

    @staticmethod
    def _key(connector_name: str) -> str:
        return str(connector_name or "").strip().lower()

    def register(self, connector_name: str, builder: ConnectorBuilder) -> None:
        key = self._key(connector_name)
        if not key:
            raise ValueError("connector name must be non-empty")
        with self._lock:
            self._builders[key] = builder

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._builders)

    def create(self, spec: ConnectorSpec) -> BaseConnector:
        with self._lock:
            builder = self._builders.get(self._key(spec.connector_name))
        if builder is None:
            raise ValueError(f"Unsupported connector: {spec.connector_name}")
        return builder(spec)
