"""API key authentication for the tool server."""

import logging
import secrets
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from devlog.core.config import DEVLOG_ALLOW_NO_AUTH, DEVLOG_API_KEY

logger = logging.getLogger(__name__)

# Paths that don't require authentication
PUBLIC_PATHS = {"/api/v1/health", "/docs", "/openapi.json", "/redoc"}


async def api_key_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Validate the X-API-Key header against DEVLOG_API_KEY.

    Public paths are exempt. Without a configured key every other request is
    refused unless DEVLOG_ALLOW_NO_AUTH is set.
    """
    path = request.url.path

    if path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
        return await call_next(request)

    if not DEVLOG_API_KEY:
        if not DEVLOG_ALLOW_NO_AUTH:
            logger.error("DEVLOG_API_KEY not set - refusing unauthenticated access")
            return JSONResponse(
                status_code=503,
                content={"detail": "API key not configured"},
            )
        logger.warning("DEVLOG_API_KEY not set - tool server is unauthenticated")
        return await call_next(request)

    api_key = request.headers.get("X-API-Key")
    if not api_key:
        return JSONResponse(
            status_code=401,
            content={"detail": "Missing X-API-Key header"},
        )

    if not secrets.compare_digest(api_key, DEVLOG_API_KEY):
        return JSONResponse(
            status_code=401,
            content={"detail": "Invalid API key"},
        )

    return await call_next(request)
