"""
app/api/v1/endpoints/dashboard.py
──────────────────────────────────
Dashboard overview endpoint.

Routes
------
GET /api/v1/dashboard/{user_id}
    Today / week / month / year profit summaries, the five latest earnings
    and expenses, this month's platform ranking, a 30-day daily earnings
    chart and this year's month-by-month chart.

Records are fetched once (the wider of "year to date" and "last 30 days")
and sliced into the individual windows in memory.
"""

import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends

from analytics.buckets import earnings_by_day, monthly_totals, platform_performance
from analytics.periods import dashboard_windows, filter_by_range
from analytics.summary import summarize
from app.api.dependencies import get_repository, load_records
from core.config import get_settings
from data_engine.repository import RecordRepository
from schemas.analytics import DashboardCharts, DashboardOverview, RecentActivity
from schemas.records import DateRange

logger = logging.getLogger(__name__)
router = APIRouter()

CHART_DAYS = 30
RECENT_LIMIT = 5


@router.get(
    "/{user_id}",
    response_model=DashboardOverview,
    summary="Dashboard overview data",
)
def get_dashboard_overview(
    user_id: str,
    repo: RecordRepository = Depends(get_repository),
) -> DashboardOverview:
    """
    Everything the dashboard home screen needs in one call.

    Raises:
        HTTPException 503: Database unreachable.
    """
    now = datetime.now(ZoneInfo(get_settings().ANALYTICS_TIMEZONE))
    windows = dashboard_windows(now)
    chart_window = DateRange(start=now - timedelta(days=CHART_DAYS), end=now)
    fetch_window = DateRange(
        start=min(windows["year"].start, chart_window.start), end=now
    )

    earnings = load_records(repo.fetch_earnings, user_id, fetch_window)
    expenses = load_records(repo.fetch_expenses, user_id, fetch_window)
    logger.debug(
        "Dashboard for %s: %d earnings, %d expenses", user_id, len(earnings), len(expenses)
    )

    summaries = {
        name: summarize(filter_by_range(earnings, window), filter_by_range(expenses, window))
        for name, window in windows.items()
    }
    year_earnings = filter_by_range(earnings, windows["year"])
    year_expenses = filter_by_range(expenses, windows["year"])

    return DashboardOverview(
        summaries=summaries,
        recent_activity=RecentActivity(
            earnings=load_records(repo.recent_earnings, user_id, RECENT_LIMIT),
            expenses=load_records(repo.recent_expenses, user_id, RECENT_LIMIT),
        ),
        platform_performance=platform_performance(filter_by_range(earnings, windows["month"])),
        charts=DashboardCharts(
            daily=earnings_by_day(filter_by_range(earnings, chart_window)),
            monthly=monthly_totals(year_earnings, year_expenses),
        ),
    )
