"""
Kline normalization.

Bybit returns klines newest first as string arrays:
[startTime, open, high, low, close, volume, turnover]. The indicator engine
needs candles oldest first with unique timestamps.
"""

import logging
from typing import Any

from signaldesk.schemas.market import Candle, Ticker
from signaldesk.services.indicators.errors import DataQualityError

logger = logging.getLogger(__name__)


def _parse_row(index: int, row: Any) -> Candle:
    if not isinstance(row, (list, tuple)) or len(row) < 6:
        raise DataQualityError(f"kline row {index} is malformed: {row!r}")
    try:
        return Candle(
            time=int(row[0]),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
    except (TypeError, ValueError) as e:
        raise DataQualityError(f"kline row {index} is malformed: {e}") from e


def normalize_klines(rows: list) -> list[Candle]:
    """
    Convert raw kline rows into candles ordered oldest first.

    Raises:
        DataQualityError: malformed row or duplicate timestamp
    """
    candles = sorted((_parse_row(i, row) for i, row in enumerate(rows)), key=lambda c: c.time)

    for prev, curr in zip(candles, candles[1:]):
        if curr.time == prev.time:
            raise DataQualityError(f"duplicate candle timestamp {curr.time}")

    logger.debug(f"Normalized {len(candles)} klines")
    return candles


def parse_ticker(item: dict) -> Ticker:
    """
    Parse one entry of Bybit's tickers list.

    price24hPcnt is a fraction (0.0182 = 1.82%); it is reported in percent.
    """
    try:
        return Ticker(
            last_price=float(item["lastPrice"]),
            price_change_24h=float(item["price24hPcnt"]) * 100,
            volume_24h=float(item.get("volume24h", 0) or 0),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DataQualityError(f"ticker payload is malformed: {e}") from e
