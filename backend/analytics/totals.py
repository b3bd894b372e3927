"""
analytics/totals.py
───────────────────
Running totals shared by every aggregation in the engine.

Division by a zero denominator (no hours, no deliveries, no miles, no
earnings) resolves to ``0`` instead of raising.

Functions
---------
safe_ratio      numerator / denominator, 0 when the denominator is 0.
total_of        fold earnings and expenses into one RecordTotals.

Classes
-------
RecordTotals    immutable running totals, combined with ``+``.
"""

from dataclasses import dataclass
from typing import Iterable

from schemas.records import EarningRecord, ExpenseRecord


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or ``0.0`` when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


@dataclass(frozen=True)
class RecordTotals:
    """
    Running totals for a group of records.

    Instances are immutable; folding is done with ``+`` so each step
    produces a new value and nothing is updated in place.
    """

    earnings: float = 0.0
    expenses: float = 0.0
    hours: float = 0.0
    deliveries: int = 0
    miles: float = 0.0
    sessions: int = 0

    @classmethod
    def of_earning(cls, record: EarningRecord) -> "RecordTotals":
        return cls(
            earnings=record.total_earning,
            hours=record.hours_worked,
            deliveries=record.delivery_count,
            miles=record.miles_driven,
            sessions=1,
        )

    @classmethod
    def of_expense(cls, record: ExpenseRecord) -> "RecordTotals":
        return cls(expenses=record.amount)

    def __add__(self, other: "RecordTotals") -> "RecordTotals":
        if not isinstance(other, RecordTotals):
            return NotImplemented
        return RecordTotals(
            earnings=self.earnings + other.earnings,
            expenses=self.expenses + other.expenses,
            hours=self.hours + other.hours,
            deliveries=self.deliveries + other.deliveries,
            miles=self.miles + other.miles,
            sessions=self.sessions + other.sessions,
        )

    # ── derived ratios (only meaningful once the fold is complete) ────────

    @property
    def profit(self) -> float:
        return self.earnings - self.expenses

    @property
    def earnings_per_hour(self) -> float:
        return safe_ratio(self.earnings, self.hours)

    @property
    def earnings_per_delivery(self) -> float:
        return safe_ratio(self.earnings, self.deliveries)

    @property
    def earnings_per_mile(self) -> float:
        return safe_ratio(self.earnings, self.miles)

    @property
    def deliveries_per_hour(self) -> float:
        return safe_ratio(self.deliveries, self.hours)


def total_of(
    earnings: Iterable[EarningRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
) -> RecordTotals:
    """Fold both collections into a single :class:`RecordTotals`."""
    totals = RecordTotals()
    for earning in earnings:
        totals = totals + RecordTotals.of_earning(earning)
    for expense in expenses:
        totals = totals + RecordTotals.of_expense(expense)
    return totals
