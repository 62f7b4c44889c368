"""
Market Data Service

CONTRACT:
    Input:  MarketDataRequest
    Output: MarketData

RESPONSIBILITIES:
    - Validate symbol, interval and limit
    - Fetch klines and ticker from Bybit
    - Normalize klines oldest first, reject duplicates
    - Attach the indicator snapshot

NO LLM INVOLVEMENT - Pure data fetching and transformation.
"""

from signaldesk.services.market_data.bybit import BybitClient
from signaldesk.services.market_data.interface import MarketDataServiceInterface
from signaldesk.services.market_data.normalize import normalize_klines, parse_ticker
from signaldesk.services.market_data.service import (
    MarketDataService,
    get_market_data_service,
)

__all__ = [
    "BybitClient",
    "MarketDataServiceInterface",
    "MarketDataService",
    "get_market_data_service",
    "normalize_klines",
    "parse_ticker",
]
