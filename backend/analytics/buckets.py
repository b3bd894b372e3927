"""
analytics/buckets.py
────────────────────
Bucketer: regroups records along a chosen key for charts and comparisons.

Every grouping is a two-pass fold.  Pass one combines immutable
:class:`~analytics.totals.RecordTotals` per key; pass two derives
ratios from the finished totals into new result models, so no ratio is
ever read off a partially accumulated bucket.

Keys are typed: ``datetime.date`` for days, :class:`Platform`,
:class:`ExpenseCategory` and month indexes (0 = January).
"""

from datetime import date as Date
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from analytics.totals import RecordTotals
from schemas.analytics import (
    CategoryAmount,
    DailyAmount,
    DailyProfit,
    MonthlyTotals,
    PlatformPerformance,
)
from schemas.records import EarningRecord, ExpenseCategory, ExpenseRecord, Platform

K = TypeVar("K", bound=Hashable)

MONTHS_PER_YEAR = 12


def fold_totals(
    earnings: Iterable[EarningRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
    earning_key: Optional[Callable[[EarningRecord], K]] = None,
    expense_key: Optional[Callable[[ExpenseRecord], K]] = None,
) -> Dict[K, RecordTotals]:
    """
    Group records into per-key :class:`RecordTotals`.

    Each collection is walked once.  A collection is skipped when its key
    function is not given.  Keys appear in first-seen order.

    Args:
        earnings:    Earning records to fold.
        expenses:    Expense records to fold.
        earning_key: Extracts the bucket key from an earning.
        expense_key: Extracts the bucket key from an expense.

    Returns:
        Fresh mapping of key → totals.
    """
    buckets: Dict[K, RecordTotals] = {}
    if earning_key is not None:
        for earning in earnings:
            key = earning_key(earning)
            buckets[key] = buckets.get(key, RecordTotals()) + RecordTotals.of_earning(earning)
    if expense_key is not None:
        for expense in expenses:
            key = expense_key(expense)
            buckets[key] = buckets.get(key, RecordTotals()) + RecordTotals.of_expense(expense)
    return buckets


def _record_day(record) -> Date:
    return record.date


# ── by day ────────────────────────────────────────────────────────────────────


def profit_by_day(
    earnings: Sequence[EarningRecord],
    expenses: Sequence[ExpenseRecord],
) -> List[DailyProfit]:
    """Earnings, expenses and profit per booked day, oldest first."""
    buckets = fold_totals(earnings, expenses, _record_day, _record_day)
    return [
        DailyProfit(
            date=day,
            earnings=totals.earnings,
            expenses=totals.expenses,
            profit=totals.profit,
        )
        for day, totals in sorted(buckets.items())
    ]


def earnings_by_day(earnings: Sequence[EarningRecord]) -> List[DailyAmount]:
    """Daily earnings series for charts, oldest first."""
    buckets = fold_totals(earnings, earning_key=_record_day)
    return [
        DailyAmount(date=day, amount=totals.earnings)
        for day, totals in sorted(buckets.items())
    ]


def expenses_by_day(expenses: Sequence[ExpenseRecord]) -> List[DailyAmount]:
    """Daily expense series, oldest first."""
    buckets = fold_totals(expenses=expenses, expense_key=_record_day)
    return [
        DailyAmount(date=day, amount=totals.expenses)
        for day, totals in sorted(buckets.items())
    ]


# ── by platform ───────────────────────────────────────────────────────────────


def platform_performance(earnings: Sequence[EarningRecord]) -> List[PlatformPerformance]:
    """
    Per-platform totals and efficiency ratios.

    The result is sorted by total earnings, highest first.  Ties keep the
    order in which the platforms first appear in ``earnings``.
    """
    buckets: Dict[Platform, RecordTotals] = fold_totals(
        earnings, earning_key=lambda record: record.platform
    )
    rows = [
        PlatformPerformance(
            platform=platform.value,
            total_earnings=totals.earnings,
            total_deliveries=totals.deliveries,
            total_hours=totals.hours,
            total_miles=totals.miles,
            earnings_per_hour=totals.earnings_per_hour,
            earnings_per_delivery=totals.earnings_per_delivery,
            earnings_per_mile=totals.earnings_per_mile,
            deliveries_per_hour=totals.deliveries_per_hour,
        )
        for platform, totals in buckets.items()
    ]
    # sorted() is stable, so equal totals keep first-seen order.
    return sorted(rows, key=lambda row: row.total_earnings, reverse=True)


# ── by month ──────────────────────────────────────────────────────────────────


def _month_slots(buckets: Dict[int, RecordTotals], field: str) -> List[float]:
    slots = [0.0] * MONTHS_PER_YEAR
    for month, totals in buckets.items():
        slots[month] = getattr(totals, field)
    return slots


def monthly_totals(
    earnings: Sequence[EarningRecord],
    expenses: Sequence[ExpenseRecord] = (),
) -> MonthlyTotals:
    """
    Earnings and expenses per calendar month.

    Both lists always hold twelve slots (index 0 = January); months with
    no activity are present as ``0``.  Callers pass one year's records.
    """
    buckets = fold_totals(
        earnings,
        expenses,
        earning_key=lambda record: record.date.month - 1,
        expense_key=lambda record: record.date.month - 1,
    )
    return MonthlyTotals(
        earnings=_month_slots(buckets, "earnings"),
        expenses=_month_slots(buckets, "expenses"),
    )


# ── by category ───────────────────────────────────────────────────────────────


def expenses_by_category(expenses: Sequence[ExpenseRecord]) -> List[CategoryAmount]:
    """Expense totals per category, largest first."""
    buckets: Dict[ExpenseCategory, RecordTotals] = fold_totals(
        expenses=expenses, expense_key=lambda record: record.category
    )
    rows = [
        CategoryAmount(category=category.value, amount=totals.expenses)
        for category, totals in buckets.items()
    ]
    return sorted(rows, key=lambda row: row.amount, reverse=True)
