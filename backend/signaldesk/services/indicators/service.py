"""
Indicator Engine Service Implementation

Calculates the indicator snapshot from OHLCV data.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.

This is the one place where engine errors are translated into service
errors with a user-facing message.
"""

import logging
from typing import Optional

from signaldesk.schemas.indicators import MarketSnapshot
from signaldesk.services.base import DataQualityServiceError, InsufficientHistoryError
from signaldesk.services.indicators.errors import DataQualityError, InsufficientDataError
from signaldesk.services.indicators.interface import (
    IndicatorServiceInterface,
    SnapshotRequest,
)
from signaldesk.services.indicators.snapshot import IndicatorPeriods, build_snapshot

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    All calculations are deterministic and reproducible.
    """

    def __init__(self, periods: Optional[IndicatorPeriods] = None):
        self.periods = periods or IndicatorPeriods()

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: SnapshotRequest) -> MarketSnapshot:
        """Calculate the indicator snapshot for one symbol."""
        try:
            return build_snapshot(
                input_data.candles,
                current_price=input_data.current_price,
                symbol=input_data.symbol,
                price_change_24h=input_data.price_change_24h,
                periods=self.periods,
            )
        except InsufficientDataError as e:
            raise self._insufficient_history(input_data.symbol, e) from e
        except DataQualityError as e:
            logger.warning(f"Bad candle data for {input_data.symbol}: {e}")
            raise DataQualityServiceError(
                self.name,
                f"Market data for {input_data.symbol} is unusable: {e}",
            ) from e

    def _insufficient_history(
        self, symbol: str, error: InsufficientDataError
    ) -> InsufficientHistoryError:
        logger.info(f"Insufficient history for {symbol}: {error}")
        return InsufficientHistoryError(
            self.name,
            f"Insufficient history: {error}. "
            f"Widen your lookback window to at least {self.periods.min_candles} candles.",
            details={
                "indicator": error.indicator,
                "required": error.required,
                "available": error.available,
                "min_candles": self.periods.min_candles,
            },
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        from signaldesk.core.config import settings

        _service_instance = IndicatorService(IndicatorPeriods.from_settings(settings))
    return _service_instance
