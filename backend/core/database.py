"""
core/database.py
────────────────
Shared Supabase client for the API and the seed script.

Only :class:`data_engine.repository.RecordRepository` issues queries; it is
handed the client returned here.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from core.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Connect with the configured URL and key on first call; later calls reuse it."""
    settings = get_settings()
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client ready for %s", settings.SUPABASE_URL)
    return client
