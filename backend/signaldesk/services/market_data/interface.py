"""
Market Data Service Interface

Defines the contract for the live market data layer.
"""

from abc import abstractmethod

from signaldesk.services.base import BaseService
from signaldesk.schemas.market import MarketData, MarketDataRequest


class MarketDataServiceInterface(BaseService[MarketDataRequest, MarketData]):
    """
    Market Data Service Contract.

    INPUT: MarketDataRequest
        - symbol: One of the allowed exchange symbols
        - interval: Kline interval
        - limit: Number of candles (1-500)

    OUTPUT: MarketData
        - currentPrice / priceChange24h / volume24h from the ticker
        - candles: Latest candles, oldest first
        - indicators: Latest indicator values
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: MarketDataRequest) -> MarketData:
        """Fetch candles, compute indicators, build the response."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the exchange."""
        pass
