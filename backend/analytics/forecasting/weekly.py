"""
analytics/forecasting/weekly.py
───────────────────────────────
Weekly moving-average forecaster with a linear trend step.

Method
------
1. Sum earnings, hours and deliveries per ISO week, oldest week first.
2. Average the most recent four weeks (the moving average).
3. Classify confidence from the coefficient of variation of those four
   weekly earnings (population variance).
4. Next week  = moving average.
   Week after = moving average + mean week-over-week change (applied once).
   Hours and deliveries are projected flat at their averages.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from analytics.buckets import fold_totals
from analytics.forecasting.base import BaseForecaster
from analytics.iso_calendar import WeekKey, date_of_iso_week, iso_week_key
from analytics.totals import RecordTotals, safe_ratio
from schemas.analytics import (
    ConfidenceLabel,
    EarningsForecast,
    WeeklyAggregate,
    WeekPrediction,
)
from schemas.records import EarningRecord

logger = logging.getLogger(__name__)

# Minimum number of sessions before any projection is attempted.
MIN_RECORDS = 7

# Weeks in the moving-average window; also the minimum weekly history.
WINDOW_WEEKS = 4

# Coefficient-of-variation bounds (both exclusive).
HIGH_CONFIDENCE_COV = 0.15
LOW_CONFIDENCE_COV = 0.3


def weekly_aggregates(earnings: Sequence[EarningRecord]) -> List[WeeklyAggregate]:
    """Per-ISO-week totals, sorted by (ISO year, ISO week)."""
    buckets: Dict[WeekKey, RecordTotals] = fold_totals(
        earnings, earning_key=lambda record: iso_week_key(record.date)
    )
    return [
        WeeklyAggregate(
            year=key.year,
            week=key.week,
            total_earnings=totals.earnings,
            total_hours=totals.hours,
            total_deliveries=totals.deliveries,
        )
        for key, totals in sorted(buckets.items())
    ]


def classify_confidence(coefficient_of_variation: float) -> ConfidenceLabel:
    """``< 0.15`` → high, ``> 0.3`` → low, anything in between → medium."""
    if coefficient_of_variation < HIGH_CONFIDENCE_COV:
        return "high"
    if coefficient_of_variation > LOW_CONFIDENCE_COV:
        return "low"
    return "medium"


def average_change(values: Sequence[float]) -> float:
    """Mean of successive differences; ``0.0`` for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.mean(np.diff(values)))


def _insufficient(message: str, history: Optional[List[WeeklyAggregate]] = None) -> EarningsForecast:
    return EarningsForecast(
        sufficient_data=False,
        message=message,
        historical_weekly=history or [],
        predictions=[],
        confidence="low",
    )


class WeeklyTrendForecaster(BaseForecaster):
    """
    Moving-average + trend projection of weekly earnings.

    Args:
        window_weeks: Number of recent weeks averaged.
        min_records:  Minimum sessions required before forecasting.

    Example:
        >>> model = WeeklyTrendForecaster()
        >>> model.fit(earnings)
        >>> model.forecast().predictions
    """

    def __init__(self, window_weeks: int = WINDOW_WEEKS, min_records: int = MIN_RECORDS) -> None:
        self.window_weeks = window_weeks
        self.min_records = min_records

        self._record_count: int = 0
        self._history: List[WeeklyAggregate] = []
        self._is_fitted: bool = False

    # ── fit ──────────────────────────────────────────────────────────────

    def fit(self, earnings: Sequence[EarningRecord]) -> None:
        """Bucket the history into ISO weeks."""
        self._record_count = len(earnings)
        self._history = weekly_aggregates(earnings)
        self._is_fitted = True

    # ── forecast ─────────────────────────────────────────────────────────

    def forecast(self) -> EarningsForecast:
        if not self._is_fitted:
            raise ValueError("Call fit() before forecast()")

        if self._record_count < self.min_records:
            logger.debug("forecast: only %d records", self._record_count)
            return _insufficient("Not enough historical data for accurate predictions")

        recent = self._history[-self.window_weeks:]
        if len(recent) < self.window_weeks:
            logger.debug("forecast: only %d weeks of history", len(self._history))
            return _insufficient(
                "Not enough weekly data for accurate predictions", self._history
            )

        weekly_earnings = np.array([week.total_earnings for week in recent])
        avg_earnings = float(weekly_earnings.mean())
        avg_hours = float(np.mean([week.total_hours for week in recent]))
        avg_deliveries = float(np.mean([week.total_deliveries for week in recent]))

        # np.var divides by N (population variance).
        cov = safe_ratio(float(np.sqrt(np.var(weekly_earnings))), avg_earnings)
        trend = average_change(weekly_earnings)

        last = recent[-1]
        last_start = date_of_iso_week(last.week, last.year)

        predictions = [
            self._prediction(last_start + timedelta(days=7), avg_earnings, avg_hours, avg_deliveries),
            self._prediction(
                last_start + timedelta(days=14), avg_earnings + trend, avg_hours, avg_deliveries
            ),
        ]

        return EarningsForecast(
            sufficient_data=True,
            historical_weekly=self._history,
            predictions=predictions,
            confidence=classify_confidence(cov),
            moving_average=avg_earnings,
            trend=trend,
            coefficient_of_variation=cov,
            model_info=self.get_model_info(),
        )

    @staticmethod
    def _prediction(start, earnings: float, hours: float, deliveries: float) -> WeekPrediction:
        key = iso_week_key(start)
        return WeekPrediction(
            year=key.year,
            week=key.week,
            start_date=start,
            total_earnings=earnings,
            total_hours=hours,
            total_deliveries=deliveries,
        )

    def get_model_info(self) -> Dict[str, Any]:
        """Return forecaster metadata."""
        info = super().get_model_info()
        info.update(
            {
                "window_weeks": self.window_weeks,
                "min_records": self.min_records,
                "weeks_of_history": len(self._history),
            }
        )
        return info


def forecast_earnings(earnings: Sequence[EarningRecord]) -> EarningsForecast:
    """Fit a fresh :class:`WeeklyTrendForecaster` and return its forecast."""
    model = WeeklyTrendForecaster()
    model.fit(earnings)
    return model.forecast()
