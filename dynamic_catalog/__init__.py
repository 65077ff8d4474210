"""Dynamic catalog management: file-backed catalogs reconciled into a connector host."""

from .admin import CatalogAdmin
from .announcement import AnnouncementSink, InMemoryAnnouncementSink
from .errors import (
    CatalogError,
    HostRejection,
    InvalidCatalogName,
    MalformedCatalog,
    MissingConnectorName,
    WatchInvalidated,
)
from .host import ConnectorHost, LocalConnectorHost
from .models import AdminCode, CatalogEvent, EventKind, ExistsMode, StoreStatus
from .properties import load_properties, parse_properties, serialize_properties
from .reconciler import CatalogReconciler
from .store import CatalogStore
from .watcher import CatalogEventHandler, DirectoryWatcher

__all__ = [
    "AdminCode",
    "AnnouncementSink",
    "CatalogAdmin",
    "CatalogError",
    "CatalogEvent",
    "CatalogEventHandler",
    "CatalogReconciler",
    "CatalogStore",
    "ConnectorHost",
    "DirectoryWatcher",
    "EventKind",
    "ExistsMode",
    "HostRejection",
    "InMemoryAnnouncementSink",
    "InvalidCatalogName",
    "LocalConnectorHost",
    "MalformedCatalog",
    "MissingConnectorName",
    "StoreStatus",
    "WatchInvalidated",
    "load_properties",
    "parse_properties",
    "serialize_properties",
]
