"""
analytics/iso_calendar.py
─────────────────────────
ISO-8601 week helpers used to bucket sessions by week.

Functions
---------
iso_week_number   week number (1–53) of a date, Thursday rule.
iso_week_key      (ISO year, ISO week) pair for grouping.
date_of_iso_week  inverse mapping: first day of a given ISO week.
"""

from datetime import date as Date, datetime, timedelta, timezone
from typing import NamedTuple, Union

DateLike = Union[Date, datetime]


class WeekKey(NamedTuple):
    """ISO year and ISO week number; sorts chronologically."""

    year: int
    week: int


def _utc_day(value: DateLike) -> Date:
    """Calendar day of ``value``, taken in UTC for timezone-aware datetimes."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def iso_week_key(value: DateLike) -> WeekKey:
    """
    Return the ISO ``(year, week)`` of ``value``.

    The year is the one containing the Thursday of that week, so
    2021-01-01 maps to ``(2020, 53)`` and 2024-12-31 to ``(2025, 1)``.
    """
    iso = _utc_day(value).isocalendar()
    return WeekKey(iso[0], iso[1])


def iso_week_number(value: DateLike) -> int:
    """ISO-8601 week number of ``value``'s UTC calendar day."""
    return iso_week_key(value).week


def date_of_iso_week(week: int, year: int, clamp_to_january: bool = False) -> Date:
    """
    Return the Monday that starts ISO week ``week`` of ISO year ``year``.

    Args:
        week:             ISO week number (1–53).
        year:             ISO year.
        clamp_to_january: Reproduce the legacy mapping instead: weeks are
                          counted from the first calendar Monday of
                          ``year`` and week 1 maps to January 1st whenever
                          that Monday falls after it.

    Raises:
        ValueError: If the week does not exist in that year (ISO mode).
    """
    if not clamp_to_january:
        return Date.fromisocalendar(year, week, 1)

    january_first = Date(year, 1, 1)
    first_monday = january_first + timedelta(days=(7 - january_first.weekday()) % 7)
    if week == 1 and first_monday > january_first:
        return january_first
    return first_monday + timedelta(weeks=week - 1)
