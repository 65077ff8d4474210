"""Connector stubs for remote sources that are described but not queried locally."""

from __future__ import annotations

from .base import BaseConnector, ConnectorSpec


class JDBCConnectorStub(BaseConnector):
    """MySQL / Oracle / SQL Server catalogs. Requires ``connection-url``."""

    def __init__(self, spec: ConnectorSpec):
        super().__init__(spec)
        self.connection_url = spec.require("connection-url")
        if not self.connection_url.startswith("jdbc:"):
            raise ValueError(f"Expected a jdbc: connection-url, got {self.connection_url}")


class HTTPAPIConnectorStub(BaseConnector):
    """HTTP API catalogs. Requires ``base-url``."""

    def __init__(self, spec: ConnectorSpec):
        super().__init__(spec)
        self.base_url = spec.require("base-url")


class MemoryConnector(BaseConnector):
    """Property-only catalog used by embedded configurations and tests."""
