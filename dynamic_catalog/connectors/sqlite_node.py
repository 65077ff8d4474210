"""SQLite connector that mounts a local database file as a catalog."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List

from .base import BaseConnector, ConnectorSpec, strip_jdbc_prefix


class SQLiteCatalogConnector(BaseConnector):
    """Opens the database named by ``connection-url`` (or ``database``)."""

    def __init__(self, spec: ConnectorSpec):
        super().__init__(spec)
        location = strip_jdbc_prefix(spec.require("connection-url", "database"), "sqlite")
        self.db_path = Path(location)
        if not self.db_path.parent.is_dir():
            raise ValueError(f"SQLite database directory does not exist: {self.db_path.parent}")
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)

    def list_tables(self) -> List[str]:
        rows = self._conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        self._conn.close()
