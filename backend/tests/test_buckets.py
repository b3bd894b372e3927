"""
tests/test_buckets.py
──────────────────────
Bucketer: grouping by day, platform, month and category.
"""

from datetime import date, datetime, timezone

import pytest

from analytics.buckets import (
    earnings_by_day,
    fold_totals,
    monthly_totals,
    platform_performance,
    profit_by_day,
)


class TestFoldTotals:
    def test_skips_collections_without_key(self, make_earning, make_expense) -> None:
        buckets = fold_totals(
            [make_earning(total=10)],
            [make_expense(amount=3)],
            earning_key=lambda record: "all",
        )
        assert buckets["all"].earnings == 10
        assert buckets["all"].expenses == 0

    def test_keys_in_first_seen_order(self, make_earning) -> None:
        earnings = [
            make_earning(platform="GrubHub"),
            make_earning(platform="DoorDash"),
            make_earning(platform="GrubHub"),
        ]
        buckets = fold_totals(earnings, earning_key=lambda record: record.platform.value)
        assert list(buckets) == ["GrubHub", "DoorDash"]
        assert buckets["GrubHub"].sessions == 2


class TestByDay:
    def test_profit_by_day_merges_earnings_and_expenses(self, make_earning, make_expense) -> None:
        monday = datetime(2024, 1, 8, 10, tzinfo=timezone.utc)
        tuesday = datetime(2024, 1, 9, 10, tzinfo=timezone.utc)
        earnings = [make_earning(total=50, start=tuesday), make_earning(total=30, start=monday)]
        expenses = [make_expense(amount=10, day=date(2024, 1, 8)), make_expense(amount=5, day=date(2024, 1, 10))]

        rows = profit_by_day(earnings, expenses)

        assert [(row.date, row.earnings, row.expenses, row.profit) for row in rows] == [
            (date(2024, 1, 8), 30, 10, 20),
            (date(2024, 1, 9), 50, 0, 50),
            (date(2024, 1, 10), 0, 5, -5),
        ]

    def test_uses_booked_date_not_start_time(self, make_earning) -> None:
        late_start = datetime(2024, 1, 9, 1, tzinfo=timezone.utc)
        rows = earnings_by_day([make_earning(total=20, start=late_start, day=date(2024, 1, 8))])
        assert rows[0].date == date(2024, 1, 8)

    def test_serialises_day_as_iso_string(self, make_earning) -> None:
        rows = earnings_by_day([make_earning(total=20)])
        assert rows[0].model_dump(mode="json") == {"date": "2024-01-08", "amount": 20.0}


class TestPlatformPerformance:
    def test_sorted_descending_by_total(self, make_earning) -> None:
        earnings = [
            make_earning(total=20, platform="GrubHub"),
            make_earning(total=90, platform="DoorDash"),
            make_earning(total=50, platform="UberEats"),
            make_earning(total=15, platform="GrubHub"),
        ]
        rows = platform_performance(earnings)
        assert [row.platform for row in rows] == ["DoorDash", "UberEats", "GrubHub"]
        totals = [row.total_earnings for row in rows]
        assert totals == sorted(totals, reverse=True)

    def test_ties_keep_first_seen_order(self, make_earning) -> None:
        earnings = [
            make_earning(total=40, platform="Postmates"),
            make_earning(total=40, platform="UberEats"),
            make_earning(total=40, platform="Other"),
        ]
        assert [row.platform for row in platform_performance(earnings)] == [
            "Postmates",
            "UberEats",
            "Other",
        ]

    def test_ratios_computed_from_complete_totals(self, make_earning) -> None:
        earnings = [
            make_earning(total=30, hours=1, deliveries=2, miles=10, platform="DoorDash"),
            make_earning(total=50, hours=3, deliveries=6, miles=30, platform="DoorDash"),
        ]
        (row,) = platform_performance(earnings)
        assert row.total_earnings == 80
        assert row.total_hours == 4
        assert row.total_deliveries == 8
        assert row.earnings_per_hour == pytest.approx(20.0)
        assert row.earnings_per_delivery == pytest.approx(10.0)
        assert row.earnings_per_mile == pytest.approx(2.0)
        assert row.deliveries_per_hour == pytest.approx(2.0)

    def test_zero_denominators(self, make_earning) -> None:
        (row,) = platform_performance([make_earning(total=30, hours=0, miles=0)])
        assert row.earnings_per_hour == 0
        assert row.deliveries_per_hour == 0
        assert row.earnings_per_mile == 0

    def test_empty(self) -> None:
        assert platform_performance([]) == []


class TestMonthlyTotals:
    def test_twelve_slots_with_zeros(self, make_earning, make_expense) -> None:
        march = datetime(2024, 3, 5, 9, tzinfo=timezone.utc)
        earnings = [make_earning(total=100, start=march), make_earning(total=25, start=march)]
        expenses = [make_expense(amount=40, day=date(2024, 11, 2))]

        totals = monthly_totals(earnings, expenses)

        assert len(totals.earnings) == 12
        assert len(totals.expenses) == 12
        assert totals.earnings[2] == 125
        assert sum(totals.earnings) == 125
        assert totals.expenses[10] == 40
        assert totals.earnings[0] == 0

    def test_empty_year_is_all_zeros(self) -> None:
        totals = monthly_totals([], [])
        assert totals.earnings == [0.0] * 12
        assert totals.expenses == [0.0] * 12
