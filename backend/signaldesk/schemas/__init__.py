"""
SignalDesk Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from signaldesk.schemas.indicators import (
    BollingerValues,
    IndicatorValues,
    MACDValues,
    MarketSnapshot,
)
from signaldesk.schemas.market import (
    Candle,
    MarketData,
    MarketDataRequest,
    Ticker,
)
from signaldesk.schemas.signal import (
    ChartAnalysisRequest,
    MarketCondition,
    SignalDecision,
    SignalRequest,
    SignalType,
)

__all__ = [
    # Market
    "Candle",
    "Ticker",
    "MarketDataRequest",
    "MarketData",
    # Indicators
    "MarketSnapshot",
    "IndicatorValues",
    "MACDValues",
    "BollingerValues",
    # Signal
    "SignalRequest",
    "ChartAnalysisRequest",
    "SignalDecision",
    "SignalType",
    "MarketCondition",
]
