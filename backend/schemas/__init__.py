"""
Pydantic schemas for records and analytics results.

Separate from the engine (``analytics``) and routes (HTTP layer).
"""

from schemas.analytics import (
    DailyAmount,
    DailyProfit,
    EarningsForecast,
    ExpenseSummary,
    HourlyRanking,
    MonthlyTotals,
    PlatformPerformance,
    ProfitSummary,
    WeeklyAggregate,
    WeekPrediction,
)
from schemas.records import DateRange, EarningRecord, ExpenseCategory, ExpenseRecord, Platform

__all__ = [
    "DailyAmount",
    "DailyProfit",
    "DateRange",
    "EarningRecord",
    "EarningsForecast",
    "ExpenseCategory",
    "ExpenseRecord",
    "ExpenseSummary",
    "HourlyRanking",
    "MonthlyTotals",
    "Platform",
    "PlatformPerformance",
    "ProfitSummary",
    "WeeklyAggregate",
    "WeekPrediction",
]
