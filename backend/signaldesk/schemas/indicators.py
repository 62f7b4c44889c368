"""
CONTRACT 2: Indicator Snapshot

Input: candle series (see schemas.market.Candle)
Output: MarketSnapshot

Latest value of each indicator series. Field names and nesting on the wire
are matched by external consumers and must not change.
"""

from pydantic import BaseModel, Field


class MACDValues(BaseModel):
    """Latest MACD values."""

    macd: float
    signal: float
    histogram: float


class BollingerValues(BaseModel):
    """Latest Bollinger Bands values."""

    upper: float
    middle: float
    lower: float


class IndicatorValues(BaseModel):
    """Latest value of every indicator."""

    ema20: float
    ema50: float
    rsi: float = Field(..., ge=0, le=100)
    macd: MACDValues
    bollinger_bands: BollingerValues = Field(..., alias="bollingerBands")
    vwap: float

    class Config:
        populate_by_name = True


class MarketSnapshot(BaseModel):
    """
    Point-in-time projection fed to the signal generator.

    Read-only: derived from a candle series, never mutated.
    """

    symbol: str
    current_price: float = Field(..., alias="currentPrice")
    price_change_24h: float = Field(default=0.0, alias="priceChange24h")
    indicators: IndicatorValues

    class Config:
        populate_by_name = True
        frozen = True
