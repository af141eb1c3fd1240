"""
Social Saver API - FastAPI Application Entry Point.

Social Saver turns links sent to a WhatsApp number into categorized,
searchable bookmarks. This module wires the application together:

- Structured logging configured from settings
- CORS middleware for the dashboard frontend
- Startup/shutdown handlers for the MongoDB connection and shared services
- Root and health endpoints
- The v1 routers under ``/api/v1``

The API keeps serving when MongoDB is unreachable at startup: the webhook
still acknowledges Twilio and dashboard endpoints answer 503 until the
database comes back on the next restart.
"""

import logging

from datetime import UTC, datetime

import uvicorn

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.v1 import api_router
from app.config import get_settings
from app.core.container import reset_services
from app.core.database import close_db, get_db_client, init_db
from app.utils.logger import setup_logging


# =============================================================================
# Configuration Loading
# =============================================================================

settings = get_settings()

setup_logging(log_level=settings.log_level, json_logs=settings.json_logs)

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI Application Initialization
# =============================================================================

app = FastAPI(
    title="Social Saver API",
    version=__version__,
    description="Save links from WhatsApp into a categorized, searchable bookmark dashboard",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Startup / Shutdown
# =============================================================================


@app.on_event("startup")
async def startup_event() -> None:
    """Connect to MongoDB and report which AI providers are available."""
    try:
        await init_db()
    except Exception as exc:
        logger.warning(f"Failed to initialize database connection: {exc}")

    providers = settings.get_available_ai_providers()
    if providers == ["keyword"]:
        logger.warning("No AI provider keys configured; using keyword classification only")
    else:
        logger.info(f"Classification chain: {' -> '.join(providers)}")

    if not settings.has_twilio_configured:
        logger.warning("Twilio credentials missing; WhatsApp replies will only be logged")

    logger.info(f"Social Saver API started on {settings.host}:{settings.port}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    try:
        await close_db()
    except Exception as exc:
        logger.warning(f"Error closing database connection: {exc}")

    reset_services()
    logger.info("Social Saver API shutdown complete")


# =============================================================================
# Root and Health Endpoints
# =============================================================================


@app.get("/", tags=["root"])
async def root() -> dict:
    return {
        "name": "Social Saver API",
        "version": __version__,
        "description": "WhatsApp-powered bookmark saver",
        "docs": "/docs",
    }


@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """
    Liveness probe with a database reachability flag.

    Always answers 200 so the process is not restarted just because MongoDB
    is down; ``database`` reports ``connected`` or ``disconnected``.
    """
    try:
        database_ok = await get_db_client().ping()
    except RuntimeError:
        database_ok = False

    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "Social Saver Backend",
        "database": "connected" if database_ok else "disconnected",
    }


app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug and not settings.is_production,
        log_level=settings.log_level.lower(),
    )
