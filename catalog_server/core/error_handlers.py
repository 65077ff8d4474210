"""Error envelopes for routes outside the catalog admin surface.

Admin routes answer integer codes themselves; these handlers cover unknown
paths, wrong methods and components used before startup finished.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ComponentNotInitializedError(RuntimeError):
    """Raised when a catalog component is requested before startup wired it."""


def _envelope(request: Request, code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"error": {"code": code, "message": message, "path": str(request.url.path)}},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("HTTP %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
    return _envelope(request, exc.status_code, str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and hide its details from the client."""
    if isinstance(exc, ComponentNotInitializedError):
        logger.error("%s %s before startup completed: %s", request.method, request.url.path, exc)
        return _envelope(request, status.HTTP_503_SERVICE_UNAVAILABLE, "Service is starting")

    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return _envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
