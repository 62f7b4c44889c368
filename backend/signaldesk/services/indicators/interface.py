"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from dataclasses import dataclass

from signaldesk.services.base import BaseService
from signaldesk.schemas.indicators import MarketSnapshot
from signaldesk.schemas.market import Candle


@dataclass
class SnapshotRequest:
    """Input for the indicator engine."""

    symbol: str
    candles: list[Candle]
    current_price: float
    price_change_24h: float = 0.0


class IndicatorServiceInterface(BaseService[SnapshotRequest, MarketSnapshot]):
    """
    Indicator Engine Service Contract.

    INPUT: SnapshotRequest
        - symbol: Exchange symbol
        - candles: OHLCV candles, oldest first
        - current_price / price_change_24h: From the ticker

    OUTPUT: MarketSnapshot
        - Latest EMA20, EMA50, RSI, MACD, Bollinger Bands, VWAP

    ERRORS:
        - InsufficientHistoryError: widen the lookback window
        - DataQualityServiceError: upstream candles are degenerate
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: SnapshotRequest) -> MarketSnapshot:
        """Calculate the indicator snapshot for a candle series."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
