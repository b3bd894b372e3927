"""
tests/test_seed.py
───────────────────
Smoke-tests for the demo seed script.

Run with::

    cd backend
    pytest tests/test_seed.py -v

Tests marked ``integration`` write to a REAL Supabase instance, so a running
local Supabase (``supabase start``) and real credentials are required::

    pytest tests/test_seed.py -m integration
"""

import logging
from datetime import date
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from analytics.forecasting import forecast_earnings
from scripts.seed_data import build_expenses, build_sessions, seed

logger = logging.getLogger(__name__)


# ─── Unit tests (no network, no DB) ───────────────────────────────────────────


def test_sessions_are_valid_and_in_the_past() -> None:
    sessions = build_sessions("demo-user", weeks=4, rng=np.random.default_rng(7))
    assert sessions
    assert all(s.date < date.today() for s in sessions)
    assert all(s.end_time > s.start_time for s in sessions)
    assert all(s.total_earning == pytest.approx(s.base_earning + s.tips + s.bonuses) for s in sessions)


def test_same_seed_same_sessions() -> None:
    first = build_sessions("demo-user", weeks=2, rng=np.random.default_rng(1))
    second = build_sessions("demo-user", weeks=2, rng=np.random.default_rng(1))
    assert first == second


def test_seeded_history_is_forecastable() -> None:
    sessions = build_sessions("demo-user", weeks=8, rng=np.random.default_rng(7))
    assert forecast_earnings(sessions).sufficient_data is True


def test_expenses_weekly_fuel_and_monthly_phone_bill() -> None:
    expenses = build_expenses("demo-user", weeks=8, rng=np.random.default_rng(7))
    categories = [e.category.value for e in expenses]
    assert categories.count("Fuel") == 8
    assert categories.count("Phone Bill") == 2


def test_seed_inserts_through_repository() -> None:
    """``seed`` hands both batches to the repository, with no real DB."""
    repo = MagicMock()
    with patch("scripts.seed_data.get_supabase_client"), patch(
        "scripts.seed_data.RecordRepository.from_settings", return_value=repo
    ):
        seed("demo-user", weeks=2, seed_value=3)

    repo.insert_earnings.assert_called_once()
    repo.insert_expenses.assert_called_once()


# ─── Integration tests (require live Supabase) ────────────────────────────────


@pytest.mark.integration
def test_seed_live_round_trip() -> None:
    """Seed a demo user and read the history back through the repository."""
    from core.config import get_settings
    from core.database import get_supabase_client
    from data_engine.repository import RecordRepository

    seed("integration-user", weeks=4, seed_value=11)
    repo = RecordRepository.from_settings(get_supabase_client(), get_settings())
    earnings = repo.fetch_earnings("integration-user")
    assert earnings
    logger.info("Round trip: %d sessions read back", len(earnings))
