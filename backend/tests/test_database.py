"""
tests/test_database.py
───────────────────────
Supabase client construction.
"""

from unittest.mock import MagicMock

import pytest

from core import database
from core.config import get_settings


@pytest.fixture
def fresh_client_cache():
    database.get_supabase_client.cache_clear()
    yield
    database.get_supabase_client.cache_clear()


def test_client_built_once_from_settings(monkeypatch, fresh_client_cache) -> None:
    factory = MagicMock(return_value=MagicMock(name="client"))
    monkeypatch.setattr(database, "create_client", factory)

    first = database.get_supabase_client()
    second = database.get_supabase_client()

    assert first is second
    settings = get_settings()
    factory.assert_called_once_with(settings.SUPABASE_URL, settings.SUPABASE_KEY)
