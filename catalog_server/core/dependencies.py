"""FastAPI dependency wiring."""

from fastapi import Depends, Request

from catalog_server.core.error_handlers import ComponentNotInitializedError
from dynamic_catalog import CatalogAdmin, CatalogReconciler, InMemoryAnnouncementSink, LocalConnectorHost


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ComponentNotInitializedError(f"{name} not initialised")
    return value


def get_catalog_admin(request: Request) -> CatalogAdmin:
    """Resolve the catalog admin from application state."""

    return _state(request, "catalog_admin")


def get_reconciler(request: Request) -> CatalogReconciler:
    """Resolve the catalog reconciler from application state."""

    return _state(request, "reconciler")


def get_connector_host(request: Request) -> LocalConnectorHost:
    return _state(request, "connector_host")


def get_announcements(request: Request) -> InMemoryAnnouncementSink:
    return _state(request, "announcements")


CatalogAdminDep = Depends(get_catalog_admin)
ReconcilerDep = Depends(get_reconciler)
ConnectorHostDep = Depends(get_connector_host)
AnnouncementsDep = Depends(get_announcements)

__all__ = [
    "CatalogAdminDep",
    "ReconcilerDep",
    "ConnectorHostDep",
    "AnnouncementsDep",
    "get_catalog_admin",
    "get_reconciler",
    "get_connector_host",
    "get_announcements",
]
