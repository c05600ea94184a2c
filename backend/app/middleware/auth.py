"""Shared-secret protection of the ``/api`` routes."""

from __future__ import annotations

import secrets

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from facturago.logging_config import get_logger

from ..config import get_settings

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"
PROTECTED_PREFIX = "/api"


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Reject ``/api`` calls whose ``X-API-Key`` does not match ``API_KEY``.

    Health, docs and the root stay public. Without a configured key every
    request passes, which is the local development setup.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if request.method == "OPTIONS" or not path.startswith(PROTECTED_PREFIX):
            return await call_next(request)

        expected = get_settings().api_key
        if not expected:
            return await call_next(request)

        provided = request.headers.get(API_KEY_HEADER, "")
        if not secrets.compare_digest(provided.encode(), expected.encode()):
            logger.warning("Rejected %s %s: invalid API key", request.method, path)
            return JSONResponse(status_code=401, content={"detail": "Invalid or missing API key"})

        return await call_next(request)
