"""Tests for SignalService reply parsing and fallbacks."""

import json

import pytest

from signaldesk.schemas.indicators import BollingerValues, IndicatorValues, MACDValues, MarketSnapshot
from signaldesk.schemas.signal import MarketCondition, SignalRequest, SignalType
from signaldesk.services.base import PaymentRequiredError, RateLimitError
from signaldesk.services.llm import (
    LLMConfig,
    LLMResponse,
    SignalService,
    extract_json_object,
    generate_signal,
    parse_decision,
)
from signaldesk.services.llm import signal as signal_module


@pytest.fixture
def snapshot():
    return MarketSnapshot(
        symbol="BTCUSDT",
        current_price=43250.5,
        price_change_24h=1.82,
        indicators=IndicatorValues(
            ema20=43100.25,
            ema50=42800.75,
            rsi=61.37,
            macd=MACDValues(macd=120.5, signal=98.25, histogram=22.25),
            bollinger_bands=BollingerValues(upper=43900.0, middle=43050.0, lower=42200.0),
            vwap=42990.1,
        ),
    )


class FakeLLMClient:
    def __init__(self, content=None, error=None, api_key="test-key"):
        self.config = LLMConfig(api_key=api_key)
        self.content = content
        self.error = error
        self.prompts = []

    async def generate(self, system_prompt, user_prompt, temperature=None, max_tokens=None):
        self.prompts.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model="fake")


def reply(**overrides):
    data = {
        "signal": "BUY",
        "confidence": 82,
        "entry_price": 43250.5,
        "stop_loss": 42800.0,
        "take_profit": 44100.0,
        "market_condition": "Bullish",
        "pattern_details": "EMA20 above EMA50",
        "indicators_analysis": "RSI neutral",
        "ai_commentary": "Trend continuation",
    }
    data.update(overrides)
    return json.dumps(data)


async def run(client, snapshot, asset_type="crypto"):
    service = SignalService(llm_client=client)
    return await service.execute(SignalRequest(market_data=snapshot, asset_type=asset_type))


@pytest.mark.asyncio
async def test_parses_json_wrapped_in_markdown(snapshot):
    client = FakeLLMClient(f"Here is my analysis:\n```json\n{reply()}\n```")

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.BUY
    assert decision.confidence == 82
    assert decision.stop_loss == 42800.0
    assert decision.market_condition == MarketCondition.BULLISH
    assert decision.market_data == snapshot


@pytest.mark.asyncio
async def test_prompt_carries_snapshot_values(snapshot):
    client = FakeLLMClient(reply())

    await run(client, snapshot, asset_type="forex")

    system_prompt, user_prompt = client.prompts[0]
    assert "forex markets" in system_prompt
    assert "43250.5" in system_prompt
    assert "61.37" in system_prompt
    assert "42990.1" in system_prompt
    assert "1.82%" in system_prompt
    assert "trading signal" in user_prompt


@pytest.mark.asyncio
async def test_loose_fields_are_normalized(snapshot):
    client = FakeLLMClient(reply(signal=" sell ", market_condition="bearish", confidence=150))

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.SELL
    assert decision.market_condition == MarketCondition.BEARISH
    assert decision.confidence == 100


@pytest.mark.asyncio
async def test_model_cannot_override_market_data(snapshot):
    client = FakeLLMClient(reply(marketData={"symbol": "FAKE"}))

    decision = await run(client, snapshot)

    assert decision.market_data.symbol == "BTCUSDT"


@pytest.mark.asyncio
async def test_reply_without_json_holds(snapshot):
    client = FakeLLMClient("I cannot analyze this market right now.")

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.HOLD
    assert decision.confidence == 50
    assert decision.entry_price == 43250.5
    assert decision.stop_loss == pytest.approx(43250.5 * 0.98)
    assert decision.take_profit == pytest.approx(43250.5 * 1.02)
    assert decision.market_condition == MarketCondition.RANGING
    assert decision.ai_commentary == "I cannot analyze this market right now."


@pytest.mark.asyncio
async def test_invalid_signal_holds(snapshot):
    client = FakeLLMClient(reply(signal="MOON"))

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.HOLD
    assert decision.market_data == snapshot


@pytest.mark.asyncio
async def test_missing_signal_holds(snapshot):
    client = FakeLLMClient('{"confidence": 90, "entry_price": 43000}')

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.HOLD
    assert decision.confidence == 50


@pytest.mark.asyncio
async def test_unknown_market_condition_keeps_signal(snapshot):
    client = FakeLLMClient(reply(market_condition="Neutral"))

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.BUY
    assert decision.confidence == 82
    assert decision.market_condition == MarketCondition.RANGING
    assert decision.take_profit == 44100.0


@pytest.mark.asyncio
async def test_null_price_levels_keep_signal(snapshot):
    client = FakeLLMClient(reply(entry_price=None, stop_loss="n/a", take_profit="44,100.5"))

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.BUY
    assert decision.entry_price is None
    assert decision.stop_loss is None
    assert decision.take_profit == 44100.5


@pytest.mark.asyncio
async def test_loose_confidence_and_text(snapshot):
    client = FakeLLMClient(reply(confidence="75%", pattern_details=None, ai_commentary=["a", "b"]))

    decision = await run(client, snapshot)

    assert decision.signal == SignalType.BUY
    assert decision.confidence == 75
    assert decision.pattern_details == ""
    assert decision.ai_commentary == "['a', 'b']"


@pytest.mark.asyncio
async def test_unreadable_confidence_defaults_to_fifty(snapshot):
    decision = await run(FakeLLMClient(reply(confidence="high")), snapshot)

    assert decision.signal == SignalType.BUY
    assert decision.confidence == 50


@pytest.mark.asyncio
async def test_generate_signal_uses_default_service(snapshot, monkeypatch):
    client = FakeLLMClient(reply(signal="sell"))
    monkeypatch.setattr(signal_module, "_service_instance", SignalService(llm_client=client))

    decision = await generate_signal(snapshot, "crypto")

    assert decision.signal == SignalType.SELL
    assert decision.market_data == snapshot
    assert "crypto markets" in client.prompts[0][0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        RateLimitError("LLMGateway", "Rate limit exceeded. Please try again later."),
        PaymentRequiredError("LLMGateway", "Payment required. Please add credits to your workspace."),
    ],
)
async def test_gateway_errors_propagate(snapshot, error):
    with pytest.raises(type(error)):
        await run(FakeLLMClient(error=error), snapshot)


@pytest.mark.asyncio
async def test_health_reflects_api_key():
    assert await SignalService(FakeLLMClient()).health_check() is True
    assert await SignalService(FakeLLMClient(api_key=None)).health_check() is False


def test_extract_json_object():
    assert extract_json_object('noise {"a": 1} trailing') == {"a": 1}
    assert extract_json_object("{not json}") is None
    assert extract_json_object("") is None
    assert extract_json_object(None) is None


def test_parse_decision_without_snapshot():
    decision = parse_decision(reply(signal="hold", market_condition="RANGING"))

    assert decision.signal == SignalType.HOLD
    assert decision.market_condition == MarketCondition.RANGING
    assert decision.market_data is None
    assert parse_decision("no json here") is None
    assert parse_decision('{"signal": "MAYBE"}') is None
