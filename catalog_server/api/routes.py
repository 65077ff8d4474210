"""Aggregate FastAPI routers."""

from fastapi import APIRouter

from catalog_server.api.endpoints import catalog, health

health_router = APIRouter()
health_router.include_router(health.router, tags=["health"])

catalog_router = APIRouter()
catalog_router.include_router(catalog.router, tags=["catalog"])

__all__ = ["catalog_router", "health_router"]
