"""
analytics/forecasting — Weekly earnings forecasting.

Public API
----------
    from analytics.forecasting import BaseForecaster, WeeklyTrendForecaster
    from analytics.forecasting import forecast_earnings, weekly_aggregates
"""

from analytics.forecasting.base import BaseForecaster
from analytics.forecasting.weekly import (
    WeeklyTrendForecaster,
    forecast_earnings,
    weekly_aggregates,
)

__all__ = [
    "BaseForecaster",
    "WeeklyTrendForecaster",
    "forecast_earnings",
    "weekly_aggregates",
]
