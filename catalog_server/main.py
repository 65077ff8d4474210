"""FastAPI application entry-point."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_server.api.routes import catalog_router, health_router
from catalog_server.core.config import Settings, get_settings
from catalog_server.core.error_handlers import (
    general_exception_handler,
    http_exception_handler,
)
from catalog_server.core.logging_config import setup_logging
from dynamic_catalog import (
    CatalogAdmin,
    CatalogReconciler,
    CatalogStore,
    DirectoryWatcher,
    InMemoryAnnouncementSink,
    LocalConnectorHost,
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Application factory."""

    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="""
# Dynamic Catalog Manager

Keeps the catalogs mounted by the query engine in sync with the
`<name>.properties` files in the catalog directory.

- Admin routes live under the configured prefix (default `/presto/catalog/api`)
  and always answer HTTP 200 with an integer body.
- Changes made through the admin routes reach the engine through the
  directory watcher, so a newly added catalog becomes visible after a short delay.
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register error handlers
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.on_event("startup")
    async def startup_event() -> None:
        catalog_dir = settings.catalog_dir
        if settings.create_catalog_dir:
            catalog_dir.mkdir(parents=True, exist_ok=True)

        store = CatalogStore(catalog_dir)
        host = LocalConnectorHost()
        announcements = InMemoryAnnouncementSink()
        reconciler = CatalogReconciler(
            store,
            host,
            announcements,
            disabled_catalogs=settings.disabled_catalogs,
            watcher_factory=lambda directory: DirectoryWatcher(
                directory,
                use_polling=settings.watcher_polling,
                poll_interval=settings.watcher_poll_interval,
            ),
        )

        app.state.connector_host = host
        app.state.announcements = announcements
        app.state.reconciler = reconciler
        app.state.catalog_admin = CatalogAdmin(store, host)

        logger.info("Loading catalogs from %s", catalog_dir)
        await run_in_threadpool(reconciler.load_all)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        reconciler = getattr(app.state, "reconciler", None)
        if reconciler is not None:
            await run_in_threadpool(reconciler.close)

        host = getattr(app.state, "connector_host", None)
        if host is not None:
            host.close()

    app.include_router(health_router)
    app.include_router(catalog_router, prefix=settings.api_prefix)
    return app
