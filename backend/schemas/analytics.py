"""
Pydantic schemas for analytics engine results and API responses.

Every result is frozen so engine outputs can be shared freely between
callers.  ``model_dump(mode="json")`` yields plain mappings/lists with
ISO-8601 date strings, ready for the HTTP layer.
"""

from datetime import date as Date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.records import DateRange, EarningRecord, ExpenseRecord

ConfidenceLabel = Literal["high", "medium", "low"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class ProfitSummary(_Frozen):
    """
    Totals and per-unit ratios for one set of earnings and expenses.

    Every ratio is ``0`` when its denominator is ``0``.
    """

    total_earnings: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    total_deliveries: int
    total_hours: float
    total_miles: float
    earnings_per_hour: float
    earnings_per_delivery: float
    earnings_per_mile: float
    deliveries_per_hour: float


class CategoryAmount(_Frozen):
    """Expense total for one category."""

    category: str
    amount: float


class DailyAmount(_Frozen):
    """One point of a per-day chart series."""

    date: Date
    amount: float


class ExpenseSummary(_Frozen):
    """Expense totals, tax-deductible share and breakdowns."""

    total_expenses: float
    total_tax_deductible: float
    percent_tax_deductible: float
    by_category: List[CategoryAmount]
    by_date: List[DailyAmount]


# ---------------------------------------------------------------------------
# Bucketer
# ---------------------------------------------------------------------------


class DailyProfit(_Frozen):
    """Earnings, expenses and profit booked on one calendar day."""

    date: Date
    earnings: float
    expenses: float
    profit: float


class PlatformPerformance(_Frozen):
    """Efficiency metrics for one platform."""

    platform: str
    total_earnings: float
    total_deliveries: int
    total_hours: float
    total_miles: float
    earnings_per_hour: float
    earnings_per_delivery: float
    earnings_per_mile: float
    deliveries_per_hour: float


class MonthlyTotals(_Frozen):
    """Twelve month slots (January = index 0); idle months hold ``0``."""

    earnings: List[float] = Field(min_length=12, max_length=12)
    expenses: List[float] = Field(min_length=12, max_length=12)


# ---------------------------------------------------------------------------
# Hourly ranker
# ---------------------------------------------------------------------------


class HourlyCell(_Frozen):
    """One (weekday, hour) slot of the 7 × 24 profitability grid."""

    weekday: int = Field(ge=0, le=6, description="0 = Sunday")
    hour: int = Field(ge=0, le=23)
    total_rate: float
    count: int
    avg_earnings_per_hour: float


class OptimalHour(_Frozen):
    """A ranked time slot with its confidence weight."""

    day: str
    hour: str
    weekday: int
    hour_of_day: int
    avg_earnings_per_hour: float
    sessions: int
    confidence: float = Field(ge=0.0, le=1.0)


class HourlyRanking(_Frozen):
    """
    Result of the hourly profitability ranking.

    When ``sufficient_data`` is ``False`` the ranking and grid are empty and
    ``message`` explains why.
    """

    sufficient_data: bool
    message: Optional[str] = None
    optimal_hours: List[OptimalHour]
    grid: List[HourlyCell]


# ---------------------------------------------------------------------------
# Forecaster
# ---------------------------------------------------------------------------


class WeeklyAggregate(_Frozen):
    """Earnings, hours and deliveries summed over one ISO week."""

    year: int
    week: int
    total_earnings: float
    total_hours: float
    total_deliveries: int


class WeekPrediction(_Frozen):
    """Projected totals for a future ISO week."""

    year: int
    week: int
    start_date: Date
    total_earnings: float
    total_hours: float
    total_deliveries: float


class EarningsForecast(_Frozen):
    """
    Two-week-ahead earnings projection.

    ``sufficient_data=False`` is a normal outcome, not an error: the
    prediction list is empty and ``confidence`` is ``"low"``.
    """

    sufficient_data: bool
    message: Optional[str] = None
    historical_weekly: List[WeeklyAggregate] = Field(default_factory=list)
    predictions: List[WeekPrediction] = Field(default_factory=list)
    confidence: ConfidenceLabel = "low"
    moving_average: Optional[float] = None
    trend: Optional[float] = None
    coefficient_of_variation: Optional[float] = None
    model_info: Dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# API responses
# ---------------------------------------------------------------------------


class ProfitReport(_Frozen):
    """Response for GET /api/v1/analytics/{user_id}/profit."""

    summary: ProfitSummary
    profit_by_date: List[DailyProfit]
    date_range: DateRange


class PlatformReport(_Frozen):
    """Response for GET /api/v1/analytics/{user_id}/platform-performance."""

    platforms: List[PlatformPerformance]
    date_range: DateRange


class EarningsReport(_Frozen):
    """Response for GET /api/v1/summaries/{user_id}/earnings."""

    summary: ProfitSummary
    by_platform: List[PlatformPerformance]
    by_date: List[DailyAmount]
    date_range: DateRange


class ExpenseReport(_Frozen):
    """Response for GET /api/v1/summaries/{user_id}/expenses."""

    summary: ExpenseSummary
    date_range: DateRange


class RecentActivity(_Frozen):
    """Latest records shown on the dashboard."""

    earnings: List[EarningRecord]
    expenses: List[ExpenseRecord]


class DashboardCharts(_Frozen):
    """Chart series for the dashboard."""

    daily: List[DailyAmount]
    monthly: MonthlyTotals


class DashboardOverview(_Frozen):
    """Response for GET /api/v1/dashboard/{user_id}."""

    summaries: Dict[str, ProfitSummary]
    recent_activity: RecentActivity
    platform_performance: List[PlatformPerformance]
    charts: DashboardCharts
