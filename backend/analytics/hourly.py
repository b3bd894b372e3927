"""
analytics/hourly.py
───────────────────
Hourly profitability ranker.

Builds a 7 × 24 grid (weekday × hour of day) of session earnings rates
and ranks the slots by their average rate.

Attribution rule
----------------
Each session contributes its *whole-session* rate
(``total_earning / hours_worked``) to every hour it touches, from the start
hour through the end hour inclusive.  Sessions that cross midnight keep
counting past hour 23 and fold back with ``% 24``, so a 23:00 → 01:00
session lands in hours 23, 0 and 1.  The weekday is always the start
time's weekday.  Earnings are not split by time spent in each hour: short
overnight sessions therefore weigh as much per hour as long ones.  A
session of 24 hours or more touches each hour of day only once.
"""

import logging
from typing import List, NamedTuple, Sequence

import numpy as np

from analytics.totals import safe_ratio
from schemas.analytics import HourlyCell, HourlyRanking, OptimalHour
from schemas.records import EarningRecord

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

# Number of ranked slots returned.
DEFAULT_TOP_N = 10

# Sessions needed in a slot before its confidence saturates at 1.0.
CONFIDENCE_SATURATION = 5

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class HourSlot(NamedTuple):
    """Grid coordinate; ``weekday`` uses Sunday = 0."""

    weekday: int
    hour: int


def sunday_based_weekday(record: EarningRecord) -> int:
    """Weekday of the session start, Sunday = 0 … Saturday = 6."""
    return (record.start_time.weekday() + 1) % DAYS_PER_WEEK


def touched_slots(record: EarningRecord) -> List[HourSlot]:
    """
    Grid slots a session is attributed to (see module docstring).

    Each slot appears at most once, in first-touched order, so a session of
    24 hours or more adds one observation per hour of day.
    """
    weekday = sunday_based_weekday(record)
    start_hour = record.start_time.hour
    days_crossed = (record.end_time.date() - record.start_time.date()).days
    end_hour = record.end_time.hour + HOURS_PER_DAY * days_crossed
    slots = (
        HourSlot(weekday, hour % HOURS_PER_DAY)
        for hour in range(start_hour, end_hour + 1)
    )
    return list(dict.fromkeys(slots))


def hour_label(hour: int) -> str:
    """``9`` → ``"09:00 - 10:00"``."""
    return f"{hour:02d}:00 - {hour + 1:02d}:00"


def confidence_for(count: int) -> float:
    """Saturating confidence: ``count / 5`` capped at 1.0."""
    return min(1.0, count / CONFIDENCE_SATURATION)


def rank_hours(earnings: Sequence[EarningRecord], top_n: int = DEFAULT_TOP_N) -> HourlyRanking:
    """
    Rank weekday/hour slots by average session earnings rate.

    Args:
        earnings: Full earning history of one user.
        top_n:    Maximum number of ranked slots to return.

    Returns:
        :class:`HourlyRanking` with the dense grid and the top slots, or the
        insufficient-data variant when there are no earnings at all.
    """
    if not earnings:
        logger.debug("rank_hours: no earnings, returning insufficient-data result")
        return HourlyRanking(
            sufficient_data=False,
            message="Not enough earnings data to calculate optimal hours",
            optimal_hours=[],
            grid=[],
        )

    rate_sums = np.zeros((DAYS_PER_WEEK, HOURS_PER_DAY))
    counts = np.zeros((DAYS_PER_WEEK, HOURS_PER_DAY), dtype=int)

    for record in earnings:
        # Zero-length sessions count as observations with a zero rate.
        rate = safe_ratio(record.total_earning, record.hours_worked)
        for slot in touched_slots(record):
            rate_sums[slot.weekday, slot.hour] += rate
            counts[slot.weekday, slot.hour] += 1

    averages = np.divide(
        rate_sums, counts, out=np.zeros_like(rate_sums), where=counts > 0
    )

    grid = [
        HourlyCell(
            weekday=day,
            hour=hour,
            total_rate=float(rate_sums[day, hour]),
            count=int(counts[day, hour]),
            avg_earnings_per_hour=float(averages[day, hour]),
        )
        for day in range(DAYS_PER_WEEK)
        for hour in range(HOURS_PER_DAY)
    ]

    observed = [cell for cell in grid if cell.count > 0]
    # Stable: equal averages keep grid order (Sunday 00:00 first).
    ranked = sorted(observed, key=lambda cell: cell.avg_earnings_per_hour, reverse=True)

    optimal_hours = [
        OptimalHour(
            day=DAY_NAMES[cell.weekday],
            hour=hour_label(cell.hour),
            weekday=cell.weekday,
            hour_of_day=cell.hour,
            avg_earnings_per_hour=cell.avg_earnings_per_hour,
            sessions=cell.count,
            confidence=confidence_for(cell.count),
        )
        for cell in ranked[:top_n]
    ]
    logger.debug(
        "rank_hours: %d sessions, %d observed slots", len(earnings), len(observed)
    )
    return HourlyRanking(sufficient_data=True, optimal_hours=optimal_hours, grid=grid)
