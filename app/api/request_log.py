# =============================================================================
# Request Logging Middleware — Request/Response Lifecycle Logging
# =============================================================================
#
# Logs one line per API request: method, path, status code, latency.
# Starlette middleware wraps the whole request lifecycle, so the final
# status code (including HTTPException responses) is captured.
# =============================================================================

from __future__ import annotations

import logging
import time

from starlette.middleware.base import (
    BaseHTTPMiddleware,
    RequestResponseEndpoint,
)
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Endpoints to skip (health check, docs)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every API request with its timing."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.monotonic()
        response = await call_next(request)
        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        client_ip = request.client.host if request.client else None

        logger.info(
            "%s %s -> %d (%d ms, client=%s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client_ip,
        )
        return response
