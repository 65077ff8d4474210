"""Core models shared by the catalog store, watcher and reconciler."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict

from .errors import InvalidCatalogName

CONNECTOR_NAME_KEY = "connector.name"
CATALOG_NAME_FIELD = "catalogName"
CATALOG_SUFFIX = ".properties"
STAGING_SUFFIX = ".bak"

_CATALOG_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")

CatalogDefinition = Dict[str, str]


def is_valid_catalog_name(name: object) -> bool:
    return isinstance(name, str) and bool(_CATALOG_NAME_RE.match(name))


def validate_catalog_name(name: object) -> str:
    if not is_valid_catalog_name(name):
        raise InvalidCatalogName(name)
    return name  # type: ignore[return-value]


def catalog_file_name(name: str) -> str:
    return f"{name}{CATALOG_SUFFIX}"


def is_catalog_file_name(file_name: str) -> bool:
    """True for visible ``<name>.properties`` entries with a non-empty stem."""
    if file_name.startswith(".") or not file_name.endswith(CATALOG_SUFFIX):
        return False
    return len(file_name) > len(CATALOG_SUFFIX)


def catalog_name_from_file(file_name: str) -> str:
    if not file_name.endswith(CATALOG_SUFFIX):
        raise ValueError(f"Not a catalog file: {file_name}")
    return file_name[: -len(CATALOG_SUFFIX)]


class StoreStatus(Enum):
    """Outcome of a catalog store mutation."""

    OK = "ok"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"


class EventKind(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class CatalogEvent:
    """A change observed in the catalog directory."""

    kind: EventKind
    file_name: str

    @property
    def catalog_name(self) -> str:
        return catalog_name_from_file(self.file_name)


class DatasourceAction(Enum):
    """Announcement mutation applied after a host-side change."""

    ADD = "add"
    DELETE = "delete"


class AdminCode(IntEnum):
    """Integer outcomes carried in admin response bodies."""

    SUCCESS = 0
    ERROR = -1
    UNKNOWN = -2


class ExistsMode(Enum):
    CONF = "conf"
    FILE = "file"
    BOTH = "both"
