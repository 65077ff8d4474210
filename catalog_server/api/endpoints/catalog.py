"""Catalog admin endpoints.

Every route answers HTTP 200 with an integer body: ``0`` success, ``-1``
failure, and ``-2`` from ``/catalog`` when only the file exists.
"""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from catalog_server.core.dependencies import CatalogAdminDep
from dynamic_catalog import AdminCode, CatalogAdmin, ExistsMode

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        logger.warning("Rejected %s: request body is not valid JSON", request.url.path)
        return None


async def _dispatch(request: Request, operation: Callable[[str, dict], int]) -> int:
    name, properties = CatalogAdmin.parse_request(await _read_body(request))
    if name is None:
        return int(AdminCode.ERROR)
    return await run_in_threadpool(operation, name, properties)


@router.post("/add", response_model=int)
async def add_catalog(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    """Create ``<catalogName>.properties`` from the remaining body fields."""
    return await _dispatch(request, admin.add)


@router.post("/delete", response_model=int)
async def delete_catalog(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    return await _dispatch(request, lambda name, _props: admin.delete(name))


@router.post("/update", response_model=int)
async def update_catalog(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    """Remove then re-create the catalog file. Not atomic."""
    return await _dispatch(request, admin.update)


@router.post("/conf", response_model=int)
async def catalog_loaded(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    return await _dispatch(request, lambda name, _props: admin.exists(name, ExistsMode.CONF))


@router.post("/file", response_model=int)
async def catalog_file_exists(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    return await _dispatch(request, lambda name, _props: admin.exists(name, ExistsMode.FILE))


@router.post("/catalog", response_model=int)
async def catalog_status(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    """``0`` loaded, ``-2`` only the file exists, ``-1`` neither."""
    return await _dispatch(request, lambda name, _props: admin.exists(name, ExistsMode.BOTH))


@router.post("/exists", response_model=int)
async def catalog_exists(request: Request, admin: CatalogAdmin = CatalogAdminDep) -> int:
    """Same as the three queries above, selected by an optional ``mode`` field."""
    body = await _read_body(request)
    mode = body.get("mode", ExistsMode.BOTH.value) if isinstance(body, dict) else None
    if isinstance(body, dict):
        body = {key: value for key, value in body.items() if key != "mode"}
    name, _props = CatalogAdmin.parse_request(body)
    if name is None:
        return int(AdminCode.ERROR)
    return await run_in_threadpool(admin.exists, name, mode)
