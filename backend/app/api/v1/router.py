"""
app/api/v1/router.py
────────────────────
Aggregates every v1 endpoint router under one ``APIRouter``.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, dashboard, summaries

api_router = APIRouter()
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(summaries.router, prefix="/summaries", tags=["summaries"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
