"""Administrative catalog operations with integer outcome codes."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import CatalogError, MalformedCatalog
from .host import ConnectorHost
from .models import (
    CATALOG_NAME_FIELD,
    AdminCode,
    CatalogDefinition,
    ExistsMode,
    StoreStatus,
    is_valid_catalog_name,
)
from .properties import serialize_properties
from .store import CatalogStore

logger = logging.getLogger(__name__)


class CatalogAdmin:
    """Translates admin requests into catalog store mutations.

    Requests only touch the filesystem; the reconciler picks the change up
    from the directory watcher, so an ``add`` becomes visible in the host
    after a short delay.
    """

    def __init__(self, store: CatalogStore, host: ConnectorHost):
        self.store = store
        self.host = host

    @staticmethod
    def parse_request(body: Any) -> Tuple[Optional[str], CatalogDefinition]:
        """Split a request body into ``(catalogName, properties)``.

        Returns ``(None, {})`` when the body is not an object, the name is
        missing or invalid, or a property value is not a string.
        """
        if not isinstance(body, Mapping):
            logger.warning("Rejected admin request: body is not a JSON object")
            return None, {}
        name = body.get(CATALOG_NAME_FIELD)
        if not is_valid_catalog_name(name):
            logger.warning("Rejected admin request: invalid %s %r", CATALOG_NAME_FIELD, name)
            return None, {}
        properties: Dict[str, str] = {}
        for key, value in body.items():
            if key == CATALOG_NAME_FIELD:
                continue
            if not isinstance(value, str):
                logger.warning("Rejected admin request for %s: property %s is not a string", name, key)
                return None, {}
            properties[key] = value
        return name, properties

    def add(self, name: str, definition: CatalogDefinition) -> int:
        return int(AdminCode.SUCCESS if self._write_new(name, definition) is StoreStatus.OK else AdminCode.ERROR)

    def delete(self, name: str) -> int:
        return int(AdminCode.SUCCESS if self._remove(name) is StoreStatus.OK else AdminCode.ERROR)

    def update(self, name: str, definition: CatalogDefinition) -> int:
        try:
            serialize_properties(definition)
        except MalformedCatalog as exc:
            logger.warning("Rejected update of catalog %s: %s", name, exc)
            return int(AdminCode.ERROR)
        if self._remove(name) is not StoreStatus.OK:
            return int(AdminCode.ERROR)
        return self.add(name, definition)

    def exists(self, name: str, mode: ExistsMode | str = ExistsMode.BOTH) -> int:
        try:
            mode = ExistsMode(mode)
        except ValueError:
            logger.warning("Rejected exists request for %s: unknown mode %r", name, mode)
            return int(AdminCode.ERROR)
        if not is_valid_catalog_name(name):
            return int(AdminCode.ERROR)

        if mode is ExistsMode.CONF:
            return int(AdminCode.SUCCESS if self.host.is_loaded(name) else AdminCode.ERROR)
        if mode is ExistsMode.FILE:
            return int(AdminCode.SUCCESS if self.store.exists(name) else AdminCode.ERROR)
        if self.host.is_loaded(name):
            return int(AdminCode.SUCCESS)
        if self.store.exists(name):
            return int(AdminCode.UNKNOWN)
        return int(AdminCode.ERROR)

    def _write_new(self, name: str, definition: CatalogDefinition) -> Optional[StoreStatus]:
        try:
            status = self.store.write_new(name, definition)
        except CatalogError as exc:
            logger.warning("Rejected catalog %s: %s", name, exc)
            return None
        if status is not StoreStatus.OK:
            logger.info("Add of catalog %s returned %s", name, status.value)
        return status

    def _remove(self, name: str) -> Optional[StoreStatus]:
        try:
            status = self.store.remove(name)
        except CatalogError as exc:
            logger.warning("Rejected delete of catalog %s: %s", name, exc)
            return None
        if status is not StoreStatus.OK:
            logger.info("Delete of catalog %s returned %s", name, status.value)
        return status
