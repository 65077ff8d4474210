"""On-disk catalog store with staged, rename-based writes."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import List, Mapping, Tuple

from .models import (
    STAGING_SUFFIX,
    CatalogDefinition,
    StoreStatus,
    catalog_file_name,
    catalog_name_from_file,
    is_catalog_file_name,
    is_valid_catalog_name,
    validate_catalog_name,
)
from .properties import load_properties, serialize_properties

logger = logging.getLogger(__name__)


class CatalogStore:
    """Creates and deletes ``<name>.properties`` files in a catalog directory.

    New files are written to ``<name>.bak`` first and renamed into place, so
    readers never observe a partially written catalog. Mutations on the same
    name are serialized by one of a fixed set of striped locks.
    """

    LOCK_STRIPES = 64

    def __init__(self, base_dir: Path | str, lock_stripes: int = LOCK_STRIPES):
        self.base_dir = Path(base_dir)
        self._locks: Tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(max(1, lock_stripes)))

    def _lock_for(self, name: str) -> threading.Lock:
        return self._locks[hash(name) % len(self._locks)]

    def path_for(self, name: str) -> Path:
        return self.base_dir / catalog_file_name(validate_catalog_name(name))

    def staging_path_for(self, name: str) -> Path:
        return self.base_dir / f"{validate_catalog_name(name)}{STAGING_SUFFIX}"

    def exists(self, name: str) -> bool:
        if not is_valid_catalog_name(name):
            return False
        return self.path_for(name).is_file()

    def write_new(self, name: str, definition: Mapping[str, str]) -> StoreStatus:
        """Publish a new catalog file.

        Raises ``InvalidCatalogName`` or ``MalformedCatalog`` before touching
        the disk when the name or definition cannot be represented.
        """
        target = self.path_for(name)
        staging = self.staging_path_for(name)
        body = serialize_properties(definition)

        with self._lock_for(name):
            if target.exists():
                logger.info("Catalog file %s already exists", target)
                return StoreStatus.ALREADY_EXISTS
            try:
                with staging.open("w", encoding="utf-8", newline="") as handle:
                    handle.write(body)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(staging, target)
            except OSError as exc:
                logger.error("Failed to write catalog %s: %s", target, exc)
                self._discard_staging(staging)
                return StoreStatus.IO_FAILURE

        logger.info("Wrote catalog file %s", target)
        return StoreStatus.OK

    def remove(self, name: str) -> StoreStatus:
        target = self.path_for(name)
        with self._lock_for(name):
            if not target.is_file():
                return StoreStatus.NOT_FOUND
            try:
                target.unlink()
            except FileNotFoundError:
                return StoreStatus.NOT_FOUND
            except OSError as exc:
                logger.error("Failed to remove catalog %s: %s", target, exc)
                return StoreStatus.IO_FAILURE

        logger.info("Removed catalog file %s", target)
        return StoreStatus.OK

    def read(self, name: str) -> CatalogDefinition:
        """Parse the current contents of ``<name>.properties``."""
        return load_properties(self.path_for(name))

    def list_catalog_names(self) -> List[str]:
        """Names of the regular catalog files currently on disk, sorted."""
        if not self.base_dir.is_dir():
            return []
        names = []
        for entry in sorted(self.base_dir.iterdir()):
            if entry.is_file() and is_catalog_file_name(entry.name):
                names.append(catalog_name_from_file(entry.name))
        return names

    @staticmethod
    def _discard_staging(staging: Path) -> None:
        try:
            staging.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove staging file %s: %s", staging, exc)
