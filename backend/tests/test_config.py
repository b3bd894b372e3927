"""
tests/test_config.py
─────────────────────
Settings validation and derived properties.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings

_REQUIRED = {"SUPABASE_URL": "http://localhost:54321", "SUPABASE_KEY": "test-key"}


def test_defaults() -> None:
    settings = Settings(**_REQUIRED)
    assert settings.EARNINGS_TABLE == "earnings"
    assert settings.EXPENSES_TABLE == "expenses"
    assert settings.ANALYTICS_TIMEZONE == "UTC"
    assert settings.DEFAULT_RANGE_DAYS == 30


def test_debug_overrides_log_level() -> None:
    assert Settings(**_REQUIRED, LOG_LEVEL="warning").log_level == "WARNING"
    assert Settings(**_REQUIRED, LOG_LEVEL="warning", DEBUG=True).log_level == "DEBUG"


def test_frontend_url_added_to_cors() -> None:
    settings = Settings(**_REQUIRED, FRONTEND_URL="https://driver.example.com")
    assert settings.CORS_ORIGINS[-1] == "https://driver.example.com"


def test_empty_supabase_url_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(SUPABASE_URL="", SUPABASE_KEY="test-key")


@pytest.mark.parametrize("days", [0, 367])
def test_default_range_days_bounded(days: int) -> None:
    with pytest.raises(ValidationError):
        Settings(**_REQUIRED, DEFAULT_RANGE_DAYS=days)
