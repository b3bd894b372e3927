"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  ``pydantic-settings`` validates types at
startup, so missing required values fail fast with a clear error message.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.SUPABASE_URL)
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:          Human-readable API name shown in OpenAPI docs.
        APP_VERSION:        Semantic version string.
        APP_DESCRIPTION:    Short description shown in the OpenAPI UI.
        DEBUG:              Enable verbose logging.
        LOG_LEVEL:          Root log level when ``DEBUG`` is off.
        SUPABASE_URL:       Supabase project URL (required).
        SUPABASE_KEY:       Supabase anon or service-role key (required).
        FRONTEND_URL:       Optional deployed frontend origin for CORS.
        EARNINGS_TABLE:     Table holding work-session rows.
        EXPENSES_TABLE:     Table holding expense rows.
        ANALYTICS_TIMEZONE: Zone session timestamps are converted to before
                            hour-of-day attribution.
        DEFAULT_RANGE_DAYS: Window used when a request gives no start date.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        # Extra env vars are ignored; don't raise on unexpected keys.
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Gig Earnings Analytics API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = (
        "Profit summaries, platform efficiency, optimal working hours and "
        "weekly earnings forecasts for delivery drivers."
    )

    # ── Feature flags / logging ───────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Supabase (required) ───────────────────────────────────────────────
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_KEY: str = Field(..., description="Supabase anon or service-role key")
    EARNINGS_TABLE: str = "earnings"
    EXPENSES_TABLE: str = "expenses"

    # ── Analytics ─────────────────────────────────────────────────────────
    ANALYTICS_TIMEZONE: str = "UTC"
    DEFAULT_RANGE_DAYS: int = Field(default=30, ge=1, le=366)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Optional extra origin injected by the hosting environment.
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.
        """
        origins: List[str] = [
            "http://localhost:5173",   # Vite / React dev server
            "http://127.0.0.1:5173",
            "http://localhost:3000",   # CRA dev server
            "http://127.0.0.1:3000",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def log_level(self) -> str:
        """Effective root log level (``DEBUG`` wins over ``LOG_LEVEL``)."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

    @field_validator("SUPABASE_URL")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        """Raise if a required URL field is blank."""
        if not v:
            raise ValueError("SUPABASE_URL must not be empty")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.
    """
    return Settings()
