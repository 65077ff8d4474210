"""Health and status endpoint."""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Request
from pydantic import BaseModel

from catalog_server.core.config import get_settings
from catalog_server.core.dependencies import AnnouncementsDep, ConnectorHostDep, ReconcilerDep
from dynamic_catalog import CatalogReconciler, InMemoryAnnouncementSink, LocalConnectorHost

router = APIRouter()


class HealthStatus(BaseModel):
    """Overall service status."""
    service: str
    status: str
    timestamp: str
    catalog_dir: str
    watcher_running: bool
    live_catalogs: List[str]
    announced_catalogs: List[str]


@router.get("/health", response_model=HealthStatus)
async def get_health(
    request: Request,
    reconciler: CatalogReconciler = ReconcilerDep,
    host: LocalConnectorHost = ConnectorHostDep,
    announcements: InMemoryAnnouncementSink = AnnouncementsDep,
) -> HealthStatus:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return HealthStatus(
        service=settings.project_name,
        status="ready" if reconciler.are_catalogs_loaded() else "loading",
        timestamp=datetime.now(timezone.utc).isoformat(),
        catalog_dir=str(reconciler.store.base_dir),
        watcher_running=reconciler.watcher_running,
        live_catalogs=host.catalogs(),
        announced_catalogs=announcements.snapshot(),
    )
