"""
Indicator Engine Service

CONTRACT:
    Input:  SnapshotRequest (symbol + OHLCV candles + ticker price)
    Output: MarketSnapshot

RESPONSIBILITIES:
    - Calculate EMA, RSI, MACD, Bollinger Bands, VWAP
    - Project the latest values into a MarketSnapshot
    - Translate engine errors into user-facing service errors

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from signaldesk.services.indicators.calculations import (
    BollingerBands,
    MACDResult,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    vwap,
)
from signaldesk.services.indicators.errors import (
    DataQualityError,
    IndicatorError,
    InsufficientDataError,
    InvalidArgumentError,
)
from signaldesk.services.indicators.interface import (
    IndicatorServiceInterface,
    SnapshotRequest,
)
from signaldesk.services.indicators.series import AlignedSeries
from signaldesk.services.indicators.service import IndicatorService, get_indicator_service
from signaldesk.services.indicators.snapshot import (
    IndicatorPeriods,
    IndicatorSeriesSet,
    build_snapshot,
    compute_indicators,
)

__all__ = [
    # Calculations
    "ema",
    "sma",
    "rsi",
    "macd",
    "bollinger_bands",
    "vwap",
    "AlignedSeries",
    "MACDResult",
    "BollingerBands",
    # Errors
    "IndicatorError",
    "InsufficientDataError",
    "DataQualityError",
    "InvalidArgumentError",
    # Snapshot
    "IndicatorPeriods",
    "IndicatorSeriesSet",
    "build_snapshot",
    "compute_indicators",
    # Service
    "IndicatorServiceInterface",
    "IndicatorService",
    "SnapshotRequest",
    "get_indicator_service",
]
