# tests/conftest.py
import math

import pytest

from signaldesk.schemas.market import Candle

START_MS = 1_717_000_000_000
STEP_MS = 15 * 60 * 1000


def make_candles(closes, volume=10.0, start=START_MS, step=STEP_MS):
    """Candles around the given closes, oldest first, 15m apart."""
    candles = []
    for i, close in enumerate(closes):
        vol = volume[i] if isinstance(volume, (list, tuple)) else volume
        candles.append(
            Candle(
                time=start + i * step,
                open=close - 0.5,
                high=close + 1.0,
                low=close - 1.0,
                close=close,
                volume=vol,
            )
        )
    return candles


def wave_closes(n, base=100.0):
    """Trending series with oscillation, so gains and losses both occur."""
    return [base + 0.3 * i + 5 * math.sin(i / 3) for i in range(n)]


def bybit_rows(candles):
    """Candles as Bybit kline rows: strings, newest first."""
    return [
        [str(c.time), str(c.open), str(c.high), str(c.low), str(c.close), str(c.volume), "0"]
        for c in reversed(candles)
    ]


@pytest.fixture
def candles_60():
    return make_candles(wave_closes(60))


@pytest.fixture
def candles_factory():
    return make_candles
