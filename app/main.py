# =============================================================================
# FastAPI Application — Assembly
# =============================================================================
#
# Wires logging, middleware, and the feature routers into one app.
#
# Run locally:
#   uvicorn app.main:app --reload
# =============================================================================

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api import analysis, catalog, chat
from app.api.request_log import RequestLoggingMiddleware
from app.config import settings
from app.models.responses import HealthResponse


def configure_logging(level: str) -> None:
    """Configure the root logger and quiet chatty HTTP client loggers."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    description=(
        "Chat front end for a multi-agent ISE stock advisory service. "
        "Agent answers are returned with structured recommendations and "
        "display blocks."
    ),
    version=settings.app_version,
    debug=settings.debug,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(chat.router)
app.include_router(analysis.router)
app.include_router(catalog.router)


@app.get("/health", response_model=HealthResponse, tags=["Default"])
async def health() -> HealthResponse:
    return HealthResponse(version=settings.app_version, service=settings.app_name)
