"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_date_range, get_repository

    @router.get("/{user_id}")
    def my_route(
        user_id: str,
        date_range: DateRange = Depends(get_date_range),
        repo: RecordRepository = Depends(get_repository),
    ):
        ...
"""

from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from fastapi import Depends, HTTPException, Query
from supabase import Client

from analytics.periods import default_range
from core.config import get_settings
from core.database import get_supabase_client
from data_engine.repository import RecordRepository, RecordStoreError
from schemas.records import DateRange

T = TypeVar("T")


def get_db() -> Client:
    """
    FastAPI dependency that returns the Supabase client singleton.

    Returns:
        Authenticated Supabase ``Client`` instance.
    """
    return get_supabase_client()


def get_repository(db: Client = Depends(get_db)) -> RecordRepository:
    """Record repository bound to the configured tables and timezone."""
    return RecordRepository.from_settings(db, get_settings())


def _parse_instant(name: str, value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name} '{value}'. Use ISO 8601 (YYYY-MM-DD).",
        ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def get_date_range(
    start_date: Optional[str] = Query(
        default=None, description="Oldest day to include, ISO 8601. Defaults to 30 days before end_date."
    ),
    end_date: Optional[str] = Query(
        default=None, description="Most recent day to include, ISO 8601. Defaults to now."
    ),
) -> DateRange:
    """
    Resolve the optional ``start_date`` / ``end_date`` query parameters.

    Raises:
        HTTPException 400: Unparseable date or ``start_date`` after ``end_date``.
    """
    start = _parse_instant("start_date", start_date) if start_date else None
    end = _parse_instant("end_date", end_date) if end_date else None
    try:
        return default_range(start, end, days=get_settings().DEFAULT_RANGE_DAYS)
    except ValueError as exc:
        raise HTTPException(
            status_code=400, detail="'start_date' must not be later than 'end_date'."
        ) from exc


def load_records(fetch: Callable[..., T], *args) -> T:
    """
    Call a repository method, mapping storage failures to HTTP 503.

    Example:
        earnings = load_records(repo.fetch_earnings, user_id, date_range)
    """
    try:
        return fetch(*args)
    except RecordStoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
