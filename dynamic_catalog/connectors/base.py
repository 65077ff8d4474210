"""Connector interfaces for catalogs mounted by the local host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ConnectorSpec:
    """Everything a connector factory needs to mount one catalog."""

    catalog_name: str
    connector_name: str
    properties: Dict[str, str] = field(default_factory=dict)

    def get(self, *keys: str) -> Optional[str]:
        for key in keys:
            value = self.properties.get(key)
            if value:
                return value
        return None

    def require(self, *keys: str) -> str:
        value = self.get(*keys)
        if value is None:
            raise ValueError(f"Catalog {self.catalog_name} requires property {' or '.join(keys)}")
        return value


class BaseConnector:
    """A mounted catalog. Subclasses open resources in ``__init__`` and release them in ``close``."""

    def __init__(self, spec: ConnectorSpec):
        self.spec = spec

    @property
    def catalog_name(self) -> str:
        return self.spec.catalog_name

    def list_tables(self) -> List[str]:
        raise NotImplementedError(f"{self.spec.connector_name} connector does not expose tables")

    def describe(self) -> Dict[str, Any]:
        return {
            "catalog_name": self.spec.catalog_name,
            "connector_name": self.spec.connector_name,
            "property_names": sorted(self.spec.properties),
        }

    def close(self) -> None:
        return None


def strip_jdbc_prefix(url: str, driver: str) -> str:
    """``jdbc:<driver>:rest`` -> ``rest``; other strings are returned unchanged."""
    prefix = f"jdbc:{driver}:"
    return url[len(prefix):] if url.startswith(prefix) else url
