"""
analytics/periods.py
────────────────────
Date windows used by the API layer to scope record queries.

The engine itself never filters; these helpers only decide *which* records
the storage layer is asked for.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, TypeVar

from schemas.records import DateRange

DEFAULT_RANGE_DAYS = 30

R = TypeVar("R")


def default_range(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    days: int = DEFAULT_RANGE_DAYS,
    now: Optional[datetime] = None,
) -> DateRange:
    """
    Fill in a missing bound: ``end`` defaults to now, ``start`` to ``days``
    before ``end``.

    Raises:
        pydantic.ValidationError: If ``start`` is after ``end``.
    """
    end = end or now or datetime.now(timezone.utc)
    start = start or end - timedelta(days=days)
    return DateRange(start=start, end=end)


def dashboard_windows(now: datetime) -> Dict[str, DateRange]:
    """
    Today / this week / this month / this year, each ending at ``now``.

    Weeks start on Sunday at midnight.
    """
    midnight = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    days_since_sunday = (now.weekday() + 1) % 7
    return {
        "today": DateRange(start=midnight, end=now),
        "week": DateRange(start=midnight - timedelta(days=days_since_sunday), end=now),
        "month": DateRange(start=midnight.replace(day=1), end=now),
        "year": DateRange(start=midnight.replace(month=1, day=1), end=now),
    }


def filter_by_range(records: Iterable[R], date_range: DateRange) -> List[R]:
    """Records whose booked ``date`` falls inside ``date_range`` (inclusive)."""
    return [record for record in records if date_range.contains_day(record.date)]
