"""
tests/test_periods.py
──────────────────────
Query windows: default range, dashboard windows and in-memory filtering.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from analytics.periods import dashboard_windows, default_range, filter_by_range
from schemas.records import DateRange

NOW = datetime(2024, 5, 15, 14, 30, tzinfo=timezone.utc)  # a Wednesday


class TestDefaultRange:
    def test_last_thirty_days(self) -> None:
        window = default_range(now=NOW)
        assert window.end == NOW
        assert window.start == NOW - timedelta(days=30)

    def test_start_only(self) -> None:
        start = datetime(2024, 5, 1, tzinfo=timezone.utc)
        window = default_range(start=start, now=NOW)
        assert (window.start, window.end) == (start, NOW)

    def test_end_only(self) -> None:
        end = datetime(2024, 3, 31, tzinfo=timezone.utc)
        window = default_range(end=end, days=7)
        assert window.start == end - timedelta(days=7)

    def test_reversed_bounds_raise(self) -> None:
        with pytest.raises(ValidationError):
            default_range(
                start=datetime(2024, 6, 1, tzinfo=timezone.utc),
                end=datetime(2024, 5, 1, tzinfo=timezone.utc),
            )


class TestDashboardWindows:
    def test_window_starts(self) -> None:
        windows = dashboard_windows(NOW)
        assert windows["today"].start == datetime(2024, 5, 15, tzinfo=timezone.utc)
        assert windows["week"].start == datetime(2024, 5, 12, tzinfo=timezone.utc)
        assert windows["month"].start == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert windows["year"].start == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert all(window.end == NOW for window in windows.values())

    def test_week_starts_today_on_sunday(self) -> None:
        sunday = datetime(2024, 5, 12, 8, tzinfo=timezone.utc)
        assert dashboard_windows(sunday)["week"].start == datetime(2024, 5, 12, tzinfo=timezone.utc)


class TestFilterByRange:
    def test_inclusive_on_both_ends(self, make_expense) -> None:
        window = DateRange(
            start=datetime(2024, 5, 1, 12, tzinfo=timezone.utc),
            end=datetime(2024, 5, 3, 9, tzinfo=timezone.utc),
        )
        first = date(2024, 4, 30)
        expenses = [make_expense(day=first + timedelta(days=n)) for n in range(5)]
        kept = filter_by_range(expenses, window)
        assert [expense.date for expense in kept] == [date(2024, 5, 1), date(2024, 5, 2), date(2024, 5, 3)]
