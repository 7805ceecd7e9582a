"""
FastAPI application entrypoint.

- Configures CORS.
- Registers standardized error handlers.
- Initializes structured logging and creates tables on startup.
- Includes infra routes (health/version) and aggregates the /api/v1 routers.

Run locally (from backend/):
  uvicorn lawdesk.main:app --reload --port 8000
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lawdesk.api.router import router as api_router
from lawdesk.core.config import get_settings
from lawdesk.core.errors import register_exception_handlers
from lawdesk.core.logging import get_logger, init_logging
from lawdesk.db.session import init_db

log = get_logger(__name__)


def _create_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins.

    Reads from ALLOW_ORIGINS (comma-separated). Defaults to "*" if unset.
    """
    raw = os.getenv("ALLOW_ORIGINS", "*").strip()
    if not raw or raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def _create_infra_router() -> APIRouter:
    """
    Create a minimal API router with non-business endpoints (health, version).
    """
    router = APIRouter(prefix="/api", tags=["infra"])

    @router.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @router.get("/version")
    def version() -> dict:
        return {"version": get_settings().app_version}

    return router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_logging()
    init_db()
    settings = get_settings()
    log.info("application started", extra={"env": settings.app_env, "version": settings.app_version})
    yield


def get_application() -> FastAPI:
    """
    Construct the FastAPI app with CORS, logging, routers, and error handlers.
    """
    init_logging()
    settings = get_settings()

    app = FastAPI(title="LawDesk API", version=settings.app_version, lifespan=lifespan)

    # Wildcard origins cannot be combined with credentials
    origins = _create_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(_create_infra_router())
    app.include_router(api_router)

    register_exception_handlers(app)

    @app.get("/health", tags=["infra"])
    def root_health() -> dict:
        return {"status": "OK", "environment": settings.app_env}

    @app.get("/")
    def root() -> dict:
        return {"message": "LawDesk API", "health": "/api/health"}

    return app


# ASGI application
app = get_application()
