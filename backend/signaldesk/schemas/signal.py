"""
CONTRACT 3: Trading Signal

Input: SignalRequest (MarketSnapshot + asset type)
       ChartAnalysisRequest (chart image + asset type)
Output: SignalDecision

For snapshots the LLM interprets indicator values; it never computes them.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from signaldesk.schemas.indicators import MarketSnapshot


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class MarketCondition(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    RANGING = "Ranging"


class SignalRequest(BaseModel):
    """
    Request for a trading signal.
    Sent by: Frontend (after fetching market data)
    Received by: Signal Service
    """

    market_data: MarketSnapshot = Field(..., alias="marketData")
    asset_type: str = Field(
        ...,
        alias="assetType",
        min_length=1,
        max_length=50,
        description="Market the asset belongs to, e.g. 'crypto'",
    )

    class Config:
        populate_by_name = True


class ChartAnalysisRequest(BaseModel):
    """
    Request for a signal read off a chart image.
    Sent by: Frontend (upload section)
    Received by: Chart Analysis Service

    ``image_url`` may be a public URL or a ``data:image/...;base64`` URI.
    """

    image_url: str = Field(..., alias="imageUrl", min_length=1)
    asset_type: str = Field(
        ...,
        alias="assetType",
        min_length=1,
        max_length=50,
        description="Market the chart belongs to, e.g. 'forex'",
    )

    class Config:
        populate_by_name = True


class SignalDecision(BaseModel):
    """
    Signal returned by the LLM gateway.

    Price levels are None when the model could not name them. ``market_data``
    is only set for decisions made from an indicator snapshot.
    """

    signal: SignalType
    confidence: float = Field(..., ge=0, le=100)
    entry_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    market_condition: MarketCondition = MarketCondition.RANGING
    pattern_details: str = ""
    indicators_analysis: str = ""
    ai_commentary: str = ""
    market_data: Optional[MarketSnapshot] = Field(default=None, alias="marketData")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "signal": "BUY",
                "confidence": 85,
                "entry_price": 43250.50,
                "stop_loss": 42800.00,
                "take_profit": 44100.00,
                "market_condition": "Bullish",
                "pattern_details": "EMA20 above EMA50, MACD above signal",
                "indicators_analysis": "RSI neutral at 61",
                "ai_commentary": "Trend continuation setup",
            }
        }
