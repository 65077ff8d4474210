"""Postgres connector (real queries when psycopg is available)."""

from __future__ import annotations

from typing import List

from .base import BaseConnector, ConnectorSpec, strip_jdbc_prefix


class PostgresCatalogConnector(BaseConnector):
    """Mounts a Postgres source. Connections are opened per call."""

    def __init__(self, spec: ConnectorSpec):
        super().__init__(spec)
        url = strip_jdbc_prefix(spec.require("connection-url"), "postgresql")
        if not url.startswith(("postgresql://", "postgres://", "//")):
            raise ValueError(f"Unsupported postgres connection-url: {url}")
        self.dsn = "postgresql:" + url if url.startswith("//") else url
        self.user = spec.get("connection-user")
        self.password = spec.get("connection-password")

    def list_tables(self) -> List[str]:
        try:
            import psycopg  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("psycopg is required for postgres connector") from exc

        kwargs = {}
        if self.user:
            kwargs["user"] = self.user
        if self.password:
            kwargs["password"] = self.password
        with psycopg.connect(self.dsn, **kwargs) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT table_name FROM information_schema.tables "
                    "WHERE table_schema NOT IN ('pg_catalog', 'information_schema') ORDER BY table_name"
                )
                return [row[0] for row in cur.fetchall()]
