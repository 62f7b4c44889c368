"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
NO LLM INVOLVEMENT - All math is deterministic.

Each function returns an AlignedSeries whose offset is the index of the input
value that produced its first output. Errors are raised, never swallowed:
the caller decides how to report them.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real

import numpy as np

from signaldesk.services.indicators.errors import (
    DataQualityError,
    InsufficientDataError,
    InvalidArgumentError,
)
from signaldesk.services.indicators.series import AlignedSeries


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram, each with its own offset."""

    macd: AlignedSeries
    signal: AlignedSeries
    histogram: AlignedSeries


@dataclass(frozen=True)
class BollingerBands:
    """Upper, middle and lower bands, aligned one triple per window."""

    upper: AlignedSeries
    middle: AlignedSeries
    lower: AlignedSeries


# =============================================================================
# ARGUMENT CHECKS
# =============================================================================


def _check_period(period, name: str = "period") -> int:
    if isinstance(period, bool) or not isinstance(period, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(period).__name__}")
    if period <= 0:
        raise InvalidArgumentError(f"{name} must be > 0, got {period}")
    return int(period)


def _as_array(values, name: str = "values") -> np.ndarray:
    """Validate a numeric 1-D input without coercing non-numeric types."""
    if isinstance(values, AlignedSeries):
        arr = values.values
    elif isinstance(values, np.ndarray) or (
        isinstance(values, Sequence) and not isinstance(values, (str, bytes))
    ):
        arr = np.asarray(values)
    else:
        raise InvalidArgumentError(
            f"{name} must be a sequence of numbers, got {type(values).__name__}"
        )

    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional")
    if arr.size and arr.dtype.kind not in "iuf":
        raise InvalidArgumentError(f"{name} must contain only numbers")

    arr = arr.astype(np.float64)
    if not np.all(np.isfinite(arr)):
        raise DataQualityError(f"{name} contains NaN or infinite values")
    return arr


def _offset_of(values) -> int:
    return values.offset if isinstance(values, AlignedSeries) else 0


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(values, period: int) -> AlignedSeries:
    """Simple Moving Average."""
    period = _check_period(period)
    data = _as_array(values)
    if len(data) < period:
        raise InsufficientDataError("SMA", period, len(data))

    result = np.empty(len(data) - period + 1)
    for i in range(period - 1, len(data)):
        result[i - period + 1] = np.mean(data[i - period + 1 : i + 1])
    return AlignedSeries(result, _offset_of(values) + period - 1)


def ema(values, period: int) -> AlignedSeries:
    """
    Exponential Moving Average.

    Seeded with the simple mean of the first ``period`` values, then
    smoothed with k = 2 / (period + 1). Output length is n - period + 1.
    """
    period = _check_period(period)
    data = _as_array(values)
    if len(data) < period:
        raise InsufficientDataError("EMA", period, len(data))

    multiplier = 2 / (period + 1)
    result = np.empty(len(data) - period + 1)

    # Start with SMA
    result[0] = np.mean(data[:period])

    for i in range(period, len(data)):
        j = i - period + 1
        result[j] = (data[i] - result[j - 1]) * multiplier + result[j - 1]

    return AlignedSeries(result, _offset_of(values) + period - 1)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(values, period: int = 14) -> AlignedSeries:
    """
    Relative Strength Index.

    Gains and losses are averaged with a plain mean over each window of
    ``period`` changes (not Wilder's smoothing). A window with no losses
    reports 100. Output length is n - period.
    """
    period = _check_period(period)
    data = _as_array(values)
    if len(data) < period + 1:
        raise InsufficientDataError("RSI", period + 1, len(data))

    deltas = np.diff(data)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    result = np.empty(len(deltas) - period + 1)
    for i in range(period - 1, len(deltas)):
        avg_gain = np.mean(gains[i - period + 1 : i + 1])
        avg_loss = np.mean(losses[i - period + 1 : i + 1])

        if avg_loss == 0:
            result[i - period + 1] = 100.0
        else:
            rs = avg_gain / avg_loss
            result[i - period + 1] = 100 - (100 / (1 + rs))

    return AlignedSeries(result, _offset_of(values) + period)


def macd(
    values,
    fast: int = 12,
    slow: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    The MACD line is EMA(fast) - EMA(slow) over their common range, the
    signal line is EMA(signal_period) of the MACD line, and the histogram
    is MACD - signal over the signal line's range.
    """
    fast = _check_period(fast, "fast")
    slow = _check_period(slow, "slow")
    signal_period = _check_period(signal_period, "signal_period")
    if fast >= slow:
        raise InvalidArgumentError(f"fast ({fast}) must be shorter than slow ({slow})")

    fast_ema = ema(values, fast)
    slow_ema = ema(values, slow)

    macd_line = fast_ema - slow_ema
    signal_line = ema(macd_line, signal_period)
    histogram = macd_line - signal_line

    return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    values, period: int = 20, std_dev_multiplier: float = 2.0
) -> BollingerBands:
    """
    Bollinger Bands.

    Middle band is the SMA; width uses the population standard deviation
    (divisor ``period``).
    """
    period = _check_period(period)
    if isinstance(std_dev_multiplier, bool) or not isinstance(std_dev_multiplier, Real):
        raise InvalidArgumentError("std_dev_multiplier must be a number")
    if not np.isfinite(std_dev_multiplier) or std_dev_multiplier < 0:
        raise InvalidArgumentError(
            f"std_dev_multiplier must be >= 0, got {std_dev_multiplier}"
        )

    data = _as_array(values)
    if len(data) < period:
        raise InsufficientDataError("Bollinger Bands", period, len(data))

    middle = sma(data, period)

    std = np.empty(len(middle))
    for i in range(period - 1, len(data)):
        std[i - period + 1] = np.std(data[i - period + 1 : i + 1])

    offset = _offset_of(values) + period - 1
    return BollingerBands(
        upper=AlignedSeries(middle.values + std_dev_multiplier * std, offset),
        middle=AlignedSeries(middle.values, offset),
        lower=AlignedSeries(middle.values - std_dev_multiplier * std, offset),
    )


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def vwap(highs, lows, closes, volumes) -> AlignedSeries:
    """
    Volume Weighted Average Price.

    Cumulative from the first candle, one value per candle. Input order
    matters: pass candles oldest first. A zero cumulative volume (leading
    zero-volume candles) raises DataQualityError instead of yielding NaN.
    """
    high_arr = _as_array(highs, "highs")
    low_arr = _as_array(lows, "lows")
    close_arr = _as_array(closes, "closes")
    volume_arr = _as_array(volumes, "volumes")

    lengths = {len(high_arr), len(low_arr), len(close_arr), len(volume_arr)}
    if len(lengths) != 1:
        raise InvalidArgumentError(
            f"highs, lows, closes and volumes must have equal length, "
            f"got {len(high_arr)}, {len(low_arr)}, {len(close_arr)}, {len(volume_arr)}"
        )
    if len(close_arr) == 0:
        raise InsufficientDataError("VWAP", 1, 0)
    if np.any(volume_arr < 0):
        raise DataQualityError(
            f"negative volume at candle {int(np.argmax(volume_arr < 0))}"
        )

    typical_price = (high_arr + low_arr + close_arr) / 3
    cumulative_tpv = np.cumsum(typical_price * volume_arr)
    cumulative_volume = np.cumsum(volume_arr)

    zero = np.flatnonzero(cumulative_volume == 0)
    if zero.size:
        raise DataQualityError(
            f"zero cumulative volume through candle {int(zero[-1])}; "
            f"VWAP is undefined"
        )

    return AlignedSeries(cumulative_tpv / cumulative_volume, _offset_of(closes))
