"""
analytics/summary.py
────────────────────
Aggregator: folds earnings and expenses into totals and per-unit ratios.

All functions are pure.  Ratios come from
:class:`~analytics.totals.RecordTotals`, so zero denominators resolve to
``0`` instead of raising.

Functions
---------
summarize           profit summary for one set of earnings and expenses.
summarize_expenses  expense totals, tax-deductible share and breakdowns.
"""

from typing import Sequence

from analytics.buckets import expenses_by_category, expenses_by_day
from analytics.totals import RecordTotals, safe_ratio, total_of
from schemas.analytics import ExpenseSummary, ProfitSummary
from schemas.records import EarningRecord, ExpenseRecord

__all__ = ["RecordTotals", "safe_ratio", "summarize", "summarize_expenses", "total_of"]


def summarize(
    earnings: Sequence[EarningRecord],
    expenses: Sequence[ExpenseRecord] = (),
) -> ProfitSummary:
    """
    Profit summary for records already scoped to the caller's date range.

    ``profit_margin`` is a percentage of total earnings and is ``0`` when
    there are no earnings.  ``net_profit`` is exactly
    ``total_earnings - total_expenses``.
    """
    totals = total_of(earnings, expenses)
    return ProfitSummary(
        total_earnings=totals.earnings,
        total_expenses=totals.expenses,
        net_profit=totals.profit,
        profit_margin=safe_ratio(totals.profit, totals.earnings) * 100,
        total_deliveries=totals.deliveries,
        total_hours=totals.hours,
        total_miles=totals.miles,
        earnings_per_hour=totals.earnings_per_hour,
        earnings_per_delivery=totals.earnings_per_delivery,
        earnings_per_mile=totals.earnings_per_mile,
        deliveries_per_hour=totals.deliveries_per_hour,
    )


def summarize_expenses(expenses: Sequence[ExpenseRecord]) -> ExpenseSummary:
    """
    Expense totals plus per-category and per-day breakdowns.

    Categories are ordered by amount, largest first; days ascend.
    """
    total = sum(expense.amount for expense in expenses)
    deductible = sum(expense.amount for expense in expenses if expense.tax_deductible)
    return ExpenseSummary(
        total_expenses=total,
        total_tax_deductible=deductible,
        percent_tax_deductible=safe_ratio(deductible, total) * 100,
        by_category=expenses_by_category(expenses),
        by_date=expenses_by_day(expenses),
    )
