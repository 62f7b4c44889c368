"""
CONTRACT 1: Market Data

Input: MarketDataRequest
Output: MarketData

Raw exchange klines are normalized into ordered, immutable Candle records.
The MarketData response keeps the camelCase field names the dashboard reads.
"""

from pydantic import BaseModel, Field

from signaldesk.schemas.indicators import IndicatorValues


# =============================================================================
# INPUT: MarketDataRequest
# =============================================================================


class MarketDataRequest(BaseModel):
    """
    Request for live candles and indicators.
    Sent by: Frontend
    Received by: Market Data Service

    Symbol, interval and limit are checked against settings by the service
    so that bad values surface as a 400, not a schema error.
    """

    symbol: str = Field(default="BTCUSDT", description="Exchange symbol, e.g. BTCUSDT")
    interval: str = Field(default="15", description="Kline interval (1, 5, 15, 30, 60, 240, D)")
    limit: int = Field(default=100, description="Number of candles to fetch (1-500)")


# =============================================================================
# OUTPUT: Candle / Ticker / MarketData
# =============================================================================


class Candle(BaseModel):
    """Single OHLCV candle. Immutable once produced."""

    time: int = Field(..., description="Open time, epoch milliseconds")
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: float = Field(..., ge=0)

    class Config:
        frozen = True


class Ticker(BaseModel):
    """Latest ticker values for a symbol."""

    last_price: float = Field(..., gt=0)
    price_change_24h: float = Field(..., description="24h change in percent")
    volume_24h: float = Field(..., ge=0)


class MarketData(BaseModel):
    """
    Live market data with indicator snapshot.
    Returned by: Market Data Service
    Consumed by: Frontend chart, Signal Service
    """

    symbol: str
    interval: str
    current_price: float = Field(..., alias="currentPrice")
    price_change_24h: float = Field(..., alias="priceChange24h")
    candles: list[Candle]
    indicators: IndicatorValues
    volume_24h: float = Field(..., alias="volume24h")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "symbol": "BTCUSDT",
                "interval": "15",
                "currentPrice": 43250.5,
                "priceChange24h": 1.82,
                "candles": [
                    {
                        "time": 1717000000000,
                        "open": 43100.0,
                        "high": 43300.0,
                        "low": 43050.0,
                        "close": 43250.5,
                        "volume": 12.4,
                    }
                ],
                "indicators": {
                    "ema20": 43120.3,
                    "ema50": 42980.1,
                    "rsi": 61.2,
                    "macd": {"macd": 54.1, "signal": 41.7, "histogram": 12.4},
                    "bollingerBands": {
                        "upper": 43410.0,
                        "middle": 43090.0,
                        "lower": 42770.0,
                    },
                    "vwap": 43011.8,
                },
                "volume24h": 18234.7,
            }
        }
