"""
app/main.py
────────────
FastAPI application factory.

All business logic lives in ``analytics``; request handling lives in
``app/api/v1/endpoints/``.  This file is intentionally slim — it wires
together logging, middleware, routers, and lifecycle events only.

API Layout
----------
GET  /                                              Health check
GET  /api/v1/analytics/{user_id}/profit             Profit metrics
GET  /api/v1/analytics/{user_id}/platform-performance
GET  /api/v1/analytics/{user_id}/optimal-hours
GET  /api/v1/analytics/{user_id}/earnings-prediction
GET  /api/v1/summaries/{user_id}/earnings           Earnings summary
GET  /api/v1/summaries/{user_id}/expenses           Expense summary
GET  /api/v1/dashboard/{user_id}                    Dashboard overview

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from core.config import get_settings
from core.database import get_supabase_client

logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Warm up the Supabase client singleton so the first request
              doesn't pay the connection overhead.
    Shutdown: Nothing to close (HTTP client managed by supabase-py).
    """
    settings = get_settings()
    logger.info(
        "Starting %s v%s (debug=%s, tz=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
        settings.ANALYTICS_TIMEZONE,
    )
    try:
        get_supabase_client()  # warm up; raises early if env vars are wrong
        logger.info("Supabase connection verified")
    except Exception as exc:
        logger.error("Supabase initialisation failed: %s", exc)
        raise

    yield  # ← application runs here

    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api/v1")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness probe.

    Returns:
        Status and current API version.
    """
    return {"status": "ok", "version": settings.APP_VERSION}
