"""
Snapshot Assembler

Turns an ordered candle series into the latest value of every indicator.
Pure: no I/O, no retries. InsufficientDataError from any indicator
propagates to the caller, which is expected to re-query with a longer
lookback window.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Optional

import numpy as np

from signaldesk.schemas.indicators import (
    BollingerValues,
    IndicatorValues,
    MACDValues,
    MarketSnapshot,
)
from signaldesk.schemas.market import Candle
from signaldesk.services.indicators.calculations import (
    BollingerBands,
    MACDResult,
    OHLCVData,
    bollinger_bands,
    ema,
    macd,
    rsi,
    vwap,
)
from signaldesk.services.indicators.errors import (
    DataQualityError,
    InsufficientDataError,
    InvalidArgumentError,
)
from signaldesk.services.indicators.series import AlignedSeries


@dataclass(frozen=True)
class IndicatorPeriods:
    """Lookback periods for the snapshot indicators."""

    ema_fast: int = 20
    ema_slow: int = 50
    rsi: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bollinger: int = 20
    bollinger_std_dev: float = 2.0

    @classmethod
    def from_settings(cls, settings) -> "IndicatorPeriods":
        return cls(
            ema_fast=settings.ema_fast_period,
            ema_slow=settings.ema_slow_period,
            rsi=settings.rsi_period,
            macd_fast=settings.macd_fast_period,
            macd_slow=settings.macd_slow_period,
            macd_signal=settings.macd_signal_period,
            bollinger=settings.bollinger_period,
            bollinger_std_dev=settings.bollinger_std_dev,
        )

    @property
    def min_candles(self) -> int:
        """Shortest series every snapshot indicator can be computed on."""
        return max(
            self.ema_fast,
            self.ema_slow,
            self.rsi + 1,
            self.macd_slow + self.macd_signal - 1,
            self.bollinger,
        )


@dataclass(frozen=True)
class IndicatorSeriesSet:
    """Full indicator series for one candle history (for charting)."""

    ema_fast: AlignedSeries
    ema_slow: AlignedSeries
    rsi: AlignedSeries
    macd: MACDResult
    bollinger: BollingerBands
    vwap: AlignedSeries


def series_to_arrays(series: Sequence[Candle]) -> OHLCVData:
    """
    Convert a candle series to numpy arrays.

    Raises:
        InsufficientDataError: series is empty
        DataQualityError: timestamps are not strictly ascending
    """
    if isinstance(series, (str, bytes)) or not isinstance(series, Sequence):
        raise InvalidArgumentError(
            f"series must be a sequence of candles, got {type(series).__name__}"
        )
    if len(series) == 0:
        raise InsufficientDataError("candle series", 1, 0)
    for candle in series:
        if not isinstance(candle, Candle):
            raise InvalidArgumentError(
                f"series must contain Candle records, got {type(candle).__name__}"
            )

    timestamps = np.array([c.time for c in series], dtype=np.int64)
    steps = np.diff(timestamps)
    if np.any(steps <= 0):
        bad = int(np.argmax(steps <= 0)) + 1
        raise DataQualityError(
            f"candle timestamps must be strictly ascending (index {bad})"
        )

    return OHLCVData(
        timestamps=timestamps,
        opens=np.array([c.open for c in series]),
        highs=np.array([c.high for c in series]),
        lows=np.array([c.low for c in series]),
        closes=np.array([c.close for c in series]),
        volumes=np.array([c.volume for c in series]),
    )


def compute_indicators(
    series: Sequence[Candle], periods: Optional[IndicatorPeriods] = None
) -> IndicatorSeriesSet:
    """Compute every snapshot indicator over the full series."""
    periods = periods or IndicatorPeriods()
    data = series_to_arrays(series)

    return IndicatorSeriesSet(
        ema_fast=ema(data.closes, periods.ema_fast),
        ema_slow=ema(data.closes, periods.ema_slow),
        rsi=rsi(data.closes, periods.rsi),
        macd=macd(data.closes, periods.macd_fast, periods.macd_slow, periods.macd_signal),
        bollinger=bollinger_bands(data.closes, periods.bollinger, periods.bollinger_std_dev),
        vwap=vwap(data.highs, data.lows, data.closes, data.volumes),
    )


def build_snapshot(
    series: Sequence[Candle],
    current_price: float,
    symbol: str,
    price_change_24h: float = 0.0,
    periods: Optional[IndicatorPeriods] = None,
) -> MarketSnapshot:
    """
    Build the MarketSnapshot consumed by the signal generator.

    Args:
        series: Candles, oldest first
        current_price: Latest traded price (ticker, not last close)
        symbol: Exchange symbol
        price_change_24h: 24h change in percent
        periods: Indicator lookbacks (defaults: EMA 20/50, RSI 14, MACD 12/26/9, BB 20/2)
    """
    for label, value in (("current_price", current_price), ("price_change_24h", price_change_24h)):
        if isinstance(value, bool) or not isinstance(value, Real) or not np.isfinite(value):
            raise InvalidArgumentError(f"{label} must be a finite number, got {value!r}")
    if not isinstance(symbol, str) or not symbol:
        raise InvalidArgumentError("symbol must be a non-empty string")

    computed = compute_indicators(series, periods)

    return MarketSnapshot(
        symbol=symbol,
        current_price=float(current_price),
        price_change_24h=float(price_change_24h),
        indicators=IndicatorValues(
            ema20=computed.ema_fast.last(),
            ema50=computed.ema_slow.last(),
            rsi=computed.rsi.last(),
            macd=MACDValues(
                macd=computed.macd.macd.last(),
                signal=computed.macd.signal.last(),
                histogram=computed.macd.histogram.last(),
            ),
            bollinger_bands=BollingerValues(
                upper=computed.bollinger.upper.last(),
                middle=computed.bollinger.middle.last(),
                lower=computed.bollinger.lower.last(),
            ),
            vwap=computed.vwap.last(),
        ),
    )
