"""
Market Data API Endpoints

Live candles with the latest indicator values.
"""

import logging

from fastapi import APIRouter

from signaldesk.api.v1.errors import to_http_exception
from signaldesk.schemas.market import MarketData, MarketDataRequest
from signaldesk.services.base import ServiceError
from signaldesk.services.market_data import get_market_data_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/market-data", response_model=MarketData)
async def fetch_market_data(request: MarketDataRequest):
    """
    Fetch candles and indicators for a symbol.

    Returns the latest candles (oldest first), ticker price, 24h change and
    EMA20/EMA50/RSI/MACD/Bollinger/VWAP values.
    """
    service = get_market_data_service()
    try:
        return await service.execute(request)
    except ServiceError as e:
        logger.error(f"Error in market data endpoint: {e}")
        raise to_http_exception(e) from e
