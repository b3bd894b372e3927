"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
make_earning / make_expense
    Factories that build valid records with sensible defaults, so each test
    only spells out the fields it cares about.

mock_db
    ``MagicMock`` standing in for the Supabase client.

fake_repo
    ``MagicMock`` specced on ``RecordRepository``; every fetch returns an
    empty list unless a test overrides it.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with ``fake_repo``
    injected, so tests never hit the real database.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

import os
from datetime import date as Date, datetime, timedelta, timezone
from typing import AsyncGenerator, Callable, Optional
from unittest.mock import MagicMock

import pytest

# Settings are read at import time by app.main, so provide dummy credentials.
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.dependencies import get_repository  # noqa: E402
from app.main import app  # noqa: E402
from data_engine.repository import RecordRepository  # noqa: E402
from schemas.records import EarningRecord, ExpenseRecord  # noqa: E402


# ── Record factories ──────────────────────────────────────────────────────────


@pytest.fixture
def make_earning() -> Callable[..., EarningRecord]:
    """
    Build an ``EarningRecord``.

    ``start`` defaults to Monday 2024-01-08 10:00 UTC and ``hours`` to 2; the
    booked ``date`` follows ``start`` unless given explicitly.

        record = make_earning(total=50, platform="DoorDash")
    """

    def _make(
        total: float = 40.0,
        start: datetime = datetime(2024, 1, 8, 10, 0, tzinfo=timezone.utc),
        hours: float = 2.0,
        platform: str = "DoorDash",
        deliveries: int = 1,
        miles: float = 0.0,
        day: Optional[Date] = None,
        **overrides,
    ) -> EarningRecord:
        fields = dict(
            user_id="user-1",
            platform=platform,
            date=day or start.date(),
            start_time=start,
            end_time=start + timedelta(hours=hours),
            base_earning=total,
            total_earning=total,
            delivery_count=deliveries,
            miles_driven=miles,
        )
        fields.update(overrides)
        return EarningRecord(**fields)

    return _make


@pytest.fixture
def make_expense() -> Callable[..., ExpenseRecord]:
    """Build an ``ExpenseRecord`` (default: 10.0 of Fuel on 2024-01-08)."""

    def _make(
        amount: float = 10.0,
        day: Date = Date(2024, 1, 8),
        category: str = "Fuel",
        **overrides,
    ) -> ExpenseRecord:
        fields = dict(user_id="user-1", date=day, category=category, amount=amount)
        fields.update(overrides)
        return ExpenseRecord(**fields)

    return _make


# ── Mock Supabase client / repository ─────────────────────────────────────────


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Return a MagicMock that mimics the Supabase client's fluent query builder.

    Override the terminal ``.execute`` in individual tests:

        chain = mock_db.table.return_value.select.return_value.eq.return_value
        chain.order.return_value.execute.return_value = MagicMock(data=[...])
    """
    return MagicMock()


@pytest.fixture
def fake_repo() -> MagicMock:
    """Repository double whose fetches return empty lists by default."""
    repo = MagicMock(spec=RecordRepository)
    repo.fetch_earnings.return_value = []
    repo.fetch_expenses.return_value = []
    repo.recent_earnings.return_value = []
    repo.recent_expenses.return_value = []
    return repo


# ── Test clients ──────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(fake_repo: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the repository dependency overridden.

    Startup lifespan is skipped to avoid real DB connections in tests.
    """
    app.dependency_overrides[get_repository] = lambda: fake_repo

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(fake_repo: MagicMock) -> TestClient:
    """Synchronous ``TestClient`` using the same ``fake_repo`` override."""
    app.dependency_overrides[get_repository] = lambda: fake_repo
    client = TestClient(app, raise_server_exceptions=True)
    yield client
    app.dependency_overrides.clear()
