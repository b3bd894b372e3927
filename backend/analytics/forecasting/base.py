"""
analytics/forecasting/base.py
─────────────────────────────
Abstract base class for earnings forecasters.

Classes
-------
BaseForecaster
    Abstract interface every forecaster must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from schemas.analytics import EarningsForecast
from schemas.records import EarningRecord


class BaseForecaster(ABC):
    """
    Abstract base class for earnings forecasters.

    Enforces a fit → forecast lifecycle.  Instances are meant to live for a
    single call: build one, fit it on a user's history, read the forecast.
    """

    @abstractmethod
    def fit(self, earnings: Sequence[EarningRecord]) -> None:
        """
        Prepare the model from a user's full earning history.

        Args:
            earnings: Earning records in any order.
        """

    @abstractmethod
    def forecast(self) -> EarningsForecast:
        """
        Produce the projection for the fitted history.

        Returns:
            :class:`EarningsForecast`; the insufficient-data variant when
            the history is too short.

        Raises:
            ValueError: If called before fit().
        """

    def get_model_info(self) -> Dict[str, Any]:
        """
        Return model metadata for logging / API responses.

        Returns:
            Dict with at least ``model_name`` and ``version`` keys.
        """
        return {"model_name": self.__class__.__name__, "version": "1.0"}
