"""Connector implementations mounted by the local connector host."""

from .base import BaseConnector, ConnectorSpec
from .sqlite_node import SQLiteCatalogConnector
from .postgres_node import PostgresCatalogConnector
from .remote_stub import HTTPAPIConnectorStub, JDBCConnectorStub, MemoryConnector
from .registry import ConnectorFactory

__all__ = [
    "BaseConnector",
    "ConnectorSpec",
    "SQLiteCatalogConnector",
    "PostgresCatalogConnector",
    "JDBCConnectorStub",
    "HTTPAPIConnectorStub",
    "MemoryConnector",
    "ConnectorFactory",
]
