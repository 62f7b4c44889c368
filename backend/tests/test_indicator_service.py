"""Tests for IndicatorService error translation."""

import pytest

from conftest import make_candles, wave_closes
from signaldesk.services.base import DataQualityServiceError, InsufficientHistoryError
from signaldesk.services.indicators import IndicatorPeriods, IndicatorService, SnapshotRequest


@pytest.fixture
def service():
    return IndicatorService()


@pytest.mark.asyncio
async def test_execute_builds_snapshot(service, candles_60):
    snap = await service.execute(
        SnapshotRequest(symbol="SOLUSDT", candles=candles_60, current_price=150.0, price_change_24h=-2.5)
    )

    assert snap.symbol == "SOLUSDT"
    assert snap.current_price == 150.0
    assert snap.price_change_24h == -2.5
    assert 0 <= snap.indicators.rsi <= 100


@pytest.mark.asyncio
async def test_insufficient_history_is_translated(service):
    candles = make_candles(wave_closes(30))

    with pytest.raises(InsufficientHistoryError) as exc:
        await service.execute(SnapshotRequest(symbol="BTCUSDT", candles=candles, current_price=100.0))

    err = exc.value
    assert err.service_name == "IndicatorService"
    assert "Widen your lookback window to at least 50 candles" in err.message
    assert err.details["available"] == 30
    assert err.details["min_candles"] == 50


@pytest.mark.asyncio
async def test_bad_data_is_translated(service):
    candles = make_candles(wave_closes(60), volume=[0.0] * 60)

    with pytest.raises(DataQualityServiceError) as exc:
        await service.execute(SnapshotRequest(symbol="BTCUSDT", candles=candles, current_price=100.0))

    assert "BTCUSDT" in exc.value.message


@pytest.mark.asyncio
async def test_health_check(service):
    assert await service.health_check() is True


@pytest.mark.asyncio
async def test_configured_periods_set_the_history_floor():
    service = IndicatorService(IndicatorPeriods(ema_fast=10, ema_slow=30))
    candles = make_candles(wave_closes(40))

    snap = await service.execute(SnapshotRequest(symbol="BTCUSDT", candles=candles, current_price=100.0))
    assert snap.symbol == "BTCUSDT"

    with pytest.raises(InsufficientHistoryError) as exc:
        await service.execute(
            SnapshotRequest(symbol="BTCUSDT", candles=candles[:20], current_price=100.0)
        )
    assert exc.value.details["min_candles"] == 34
