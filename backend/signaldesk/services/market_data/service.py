"""
Market Data Service Implementation

Fetches live candles and ticker from Bybit, normalizes them, and attaches
the indicator snapshot.
"""

import asyncio
import logging
from typing import Optional

from signaldesk.schemas.market import MarketData, MarketDataRequest
from signaldesk.services.base import DataQualityServiceError, ValidationError
from signaldesk.services.indicators import IndicatorService, SnapshotRequest, get_indicator_service
from signaldesk.services.indicators.errors import DataQualityError
from signaldesk.services.market_data.bybit import BybitClient
from signaldesk.services.market_data.interface import MarketDataServiceInterface
from signaldesk.services.market_data.normalize import normalize_klines, parse_ticker

logger = logging.getLogger(__name__)


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    Candles are normalized oldest first before any indicator is computed.
    """

    def __init__(
        self,
        client: BybitClient,
        indicator_service: IndicatorService,
        allowed_symbols: list[str],
        allowed_intervals: list[str],
        max_limit: int = 500,
        candles_returned: int = 50,
    ):
        self.client = client
        self.indicator_service = indicator_service
        self.allowed_symbols = allowed_symbols
        self.allowed_intervals = allowed_intervals
        self.max_limit = max_limit
        self.candles_returned = candles_returned

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def validate_input(self, input_data: MarketDataRequest) -> MarketDataRequest:
        if input_data.symbol not in self.allowed_symbols:
            raise ValidationError(self.name, "Invalid symbol", {"symbol": input_data.symbol})
        if input_data.interval not in self.allowed_intervals:
            raise ValidationError(self.name, "Invalid interval", {"interval": input_data.interval})
        if not 1 <= input_data.limit <= self.max_limit:
            raise ValidationError(
                self.name, f"Limit must be 1-{self.max_limit}", {"limit": input_data.limit}
            )
        return input_data

    async def execute(self, input_data: MarketDataRequest) -> MarketData:
        """Fetch candles and ticker, compute indicators."""
        request = await self.validate_input(input_data)
        logger.info(
            f"Fetching market data for {request.symbol} "
            f"(interval={request.interval}, limit={request.limit})"
        )

        rows, ticker_item = await asyncio.gather(
            self.client.get_klines(request.symbol, request.interval, request.limit),
            self.client.get_ticker(request.symbol),
        )

        try:
            candles = normalize_klines(rows)
            ticker = parse_ticker(ticker_item)
        except DataQualityError as e:
            logger.warning(f"Bad exchange payload for {request.symbol}: {e}")
            raise DataQualityServiceError(self.name, str(e)) from e

        snapshot = await self.indicator_service.execute(
            SnapshotRequest(
                symbol=request.symbol,
                candles=candles,
                current_price=ticker.last_price,
                price_change_24h=ticker.price_change_24h,
            )
        )

        logger.info(f"Market data fetched successfully: {request.symbol}")
        return MarketData(
            symbol=request.symbol,
            interval=request.interval,
            current_price=snapshot.current_price,
            price_change_24h=snapshot.price_change_24h,
            candles=candles[-self.candles_returned :],
            indicators=snapshot.indicators,
            volume_24h=ticker.volume_24h,
        )

    async def health_check(self) -> bool:
        """Check Bybit connectivity."""
        return await self.client.ping()

    async def close(self) -> None:
        await self.client.close()


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        from signaldesk.core.config import settings

        _service_instance = MarketDataService(
            client=BybitClient(
                base_url=settings.bybit_base_url,
                category=settings.bybit_category,
                timeout_seconds=settings.http_timeout_seconds,
            ),
            indicator_service=get_indicator_service(),
            allowed_symbols=settings.allowed_symbols,
            allowed_intervals=settings.allowed_intervals,
            max_limit=settings.max_kline_limit,
            candles_returned=settings.candles_returned,
        )
    return _service_instance
