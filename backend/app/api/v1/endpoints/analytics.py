"""
app/api/v1/endpoints/analytics.py
──────────────────────────────────
Analytics endpoints.

Routes
------
GET /api/v1/analytics/{user_id}/profit                 Income vs. expenses.
GET /api/v1/analytics/{user_id}/platform-performance   Efficiency per platform.
GET /api/v1/analytics/{user_id}/optimal-hours          Best weekday/hour slots.
GET /api/v1/analytics/{user_id}/earnings-prediction    Two-week forecast.

Profit and platform endpoints accept optional ``start_date`` / ``end_date``
(default: last 30 days).  Optimal hours and the forecast always use the
user's full history.

"Not enough data" outcomes are returned with HTTP 200 and
``sufficient_data: false``; the client shows them as a notice, not an error.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from analytics.buckets import platform_performance, profit_by_day
from analytics.forecasting import forecast_earnings
from analytics.hourly import rank_hours
from analytics.summary import summarize
from app.api.dependencies import get_date_range, get_repository, load_records
from data_engine.repository import RecordRepository
from schemas.analytics import EarningsForecast, HourlyRanking, PlatformReport, ProfitReport
from schemas.records import DateRange

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/{user_id}/profit",
    response_model=ProfitReport,
    summary="Profit metrics (income vs. expenses)",
)
def get_profit_metrics(
    user_id: str,
    date_range: DateRange = Depends(get_date_range),
    repo: RecordRepository = Depends(get_repository),
) -> ProfitReport:
    """
    Totals, margin and per-day profit for the requested window.

    Raises:
        HTTPException 400: Invalid date parameters.
        HTTPException 503: Database unreachable.
    """
    earnings = load_records(repo.fetch_earnings, user_id, date_range)
    expenses = load_records(repo.fetch_expenses, user_id, date_range)
    return ProfitReport(
        summary=summarize(earnings, expenses),
        profit_by_date=profit_by_day(earnings, expenses),
        date_range=date_range,
    )


@router.get(
    "/{user_id}/platform-performance",
    response_model=PlatformReport,
    summary="Performance metrics by platform",
)
def get_platform_performance(
    user_id: str,
    date_range: DateRange = Depends(get_date_range),
    repo: RecordRepository = Depends(get_repository),
) -> PlatformReport:
    """Per-platform totals and ratios, highest-earning platform first."""
    earnings = load_records(repo.fetch_earnings, user_id, date_range)
    return PlatformReport(platforms=platform_performance(earnings), date_range=date_range)


@router.get(
    "/{user_id}/optimal-hours",
    response_model=HourlyRanking,
    summary="Most profitable weekday/hour slots",
)
def get_optimal_hours(
    user_id: str,
    repo: RecordRepository = Depends(get_repository),
) -> HourlyRanking:
    """Top ten weekday/hour slots by average session earnings rate."""
    earnings = load_records(repo.fetch_earnings, user_id)
    try:
        ranking = rank_hours(earnings)
    except Exception as exc:
        logger.exception("Hourly ranking failed for %s", user_id)
        raise HTTPException(status_code=500, detail="Hourly ranking failed") from exc
    logger.info(
        "Optimal hours for %s: %d sessions, %d ranked slots",
        user_id,
        len(earnings),
        len(ranking.optimal_hours),
    )
    return ranking


@router.get(
    "/{user_id}/earnings-prediction",
    response_model=EarningsForecast,
    summary="Predict the next two weeks of earnings",
)
def predict_earnings(
    user_id: str,
    repo: RecordRepository = Depends(get_repository),
) -> EarningsForecast:
    """Moving-average + trend projection from the user's weekly history."""
    earnings = load_records(repo.fetch_earnings, user_id)
    try:
        result = forecast_earnings(earnings)
    except Exception as exc:
        logger.exception("Earnings prediction failed for %s", user_id)
        raise HTTPException(status_code=500, detail="Forecast computation failed") from exc
    logger.info(
        "Earnings prediction for %s: sufficient_data=%s confidence=%s",
        user_id,
        result.sufficient_data,
        result.confidence,
    )
    return result
