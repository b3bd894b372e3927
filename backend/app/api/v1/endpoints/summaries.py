"""
app/api/v1/endpoints/summaries.py
──────────────────────────────────
Earnings and expense summary endpoints.

Routes
------
GET /api/v1/summaries/{user_id}/earnings   Totals, averages, by platform, by day.
GET /api/v1/summaries/{user_id}/expenses   Totals, tax-deductible share, by category, by day.
"""

from fastapi import APIRouter, Depends

from analytics.buckets import earnings_by_day, platform_performance
from analytics.summary import summarize, summarize_expenses
from app.api.dependencies import get_date_range, get_repository, load_records
from data_engine.repository import RecordRepository
from schemas.analytics import EarningsReport, ExpenseReport
from schemas.records import DateRange

router = APIRouter()


@router.get(
    "/{user_id}/earnings",
    response_model=EarningsReport,
    summary="Earnings summary statistics",
)
def get_earnings_summary(
    user_id: str,
    date_range: DateRange = Depends(get_date_range),
    repo: RecordRepository = Depends(get_repository),
) -> EarningsReport:
    earnings = load_records(repo.fetch_earnings, user_id, date_range)
    return EarningsReport(
        summary=summarize(earnings),
        by_platform=platform_performance(earnings),
        by_date=earnings_by_day(earnings),
        date_range=date_range,
    )


@router.get(
    "/{user_id}/expenses",
    response_model=ExpenseReport,
    summary="Expense summary statistics",
)
def get_expenses_summary(
    user_id: str,
    date_range: DateRange = Depends(get_date_range),
    repo: RecordRepository = Depends(get_repository),
) -> ExpenseReport:
    expenses = load_records(repo.fetch_expenses, user_id, date_range)
    return ExpenseReport(summary=summarize_expenses(expenses), date_range=date_range)
