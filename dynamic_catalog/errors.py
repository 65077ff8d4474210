"""Error kinds raised by the catalog manager."""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog manager failures."""


class MalformedCatalog(CatalogError):
    """Raised when a catalog body cannot be parsed or serialized."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


class MissingConnectorName(CatalogError):
    """Raised when a catalog definition has no ``connector.name`` entry."""

    def __init__(self, catalog_name: str):
        super().__init__(f"Configuration for catalog {catalog_name} does not contain connector.name")
        self.catalog_name = catalog_name


class InvalidCatalogName(CatalogError):
    """Raised when a catalog name is not a plain ``[A-Za-z0-9_-]+`` token."""

    def __init__(self, catalog_name: object):
        super().__init__(f"Invalid catalog name: {catalog_name!r}")
        self.catalog_name = catalog_name


class HostRejection(CatalogError):
    """Raised by a connector host that refuses to mount a catalog."""

    def __init__(self, catalog_name: str, reason: str):
        super().__init__(f"Host rejected catalog {catalog_name}: {reason}")
        self.catalog_name = catalog_name
        self.reason = reason


class WatchInvalidated(CatalogError):
    """Raised when the catalog directory watch can no longer deliver events."""
