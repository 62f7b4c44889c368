"""
Signal Service Implementation

Sends the indicator snapshot to the LLM gateway and parses a BUY/SELL/HOLD
decision out of its reply.

CRITICAL: LLM does NO math. All numbers come from the Indicator Engine.
"""

import json
import logging
import math
import re
from typing import Any, Optional

from signaldesk.schemas.indicators import MarketSnapshot
from signaldesk.schemas.signal import (
    MarketCondition,
    SignalDecision,
    SignalRequest,
    SignalType,
)
from signaldesk.services.llm.client import LLMClient, get_llm_client
from signaldesk.services.llm.interface import SignalServiceInterface
from signaldesk.services.llm.prompts import SIGNAL_USER_PROMPT, format_signal_prompt

logger = logging.getLogger(__name__)

JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

SIGNAL_VALUES = {s.value for s in SignalType}
CONDITION_VALUES = {c.value for c in MarketCondition}
PRICE_FIELDS = ("entry_price", "stop_loss", "take_profit")
TEXT_FIELDS = ("pattern_details", "indicators_analysis", "ai_commentary")


def extract_json_object(text: str) -> Optional[dict]:
    """Outermost {...} block of a model reply, or None."""
    match = JSON_OBJECT_RE.search(text or "")
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").replace(",", "")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _normalize_fields(data: dict) -> Optional[dict]:
    """
    Coerce a loosely formatted model reply into SignalDecision fields.

    Only the signal is mandatory; None means the reply names no usable one.
    Unknown market conditions become Ranging, unreadable price levels
    become None and a missing confidence becomes 50.
    """
    signal = data.get("signal")
    if not isinstance(signal, str) or signal.strip().upper() not in SIGNAL_VALUES:
        return None

    condition = data.get("market_condition")
    condition = condition.strip().capitalize() if isinstance(condition, str) else ""
    if condition not in CONDITION_VALUES:
        condition = MarketCondition.RANGING.value
    confidence = _as_float(data.get("confidence"))

    fields: dict[str, Any] = {
        "signal": signal.strip().upper(),
        "confidence": 50.0 if confidence is None else max(0.0, min(100.0, confidence)),
        "market_condition": condition,
    }
    for name in PRICE_FIELDS:
        fields[name] = _as_float(data.get(name))
    for name in TEXT_FIELDS:
        value = data.get(name)
        fields[name] = "" if value is None else str(value)
    return fields


def parse_decision(
    content: str, market_data: Optional[MarketSnapshot] = None
) -> Optional[SignalDecision]:
    """Decision from a model reply, or None if it holds no JSON signal."""
    data = extract_json_object(content)
    if data is None:
        return None
    fields = _normalize_fields(data)
    if fields is None:
        return None
    return SignalDecision(**fields, market_data=market_data)


def fallback_decision(snapshot: MarketSnapshot, commentary: str = "") -> SignalDecision:
    """Neutral decision used when the model reply cannot be parsed."""
    price = snapshot.current_price
    return SignalDecision(
        signal=SignalType.HOLD,
        confidence=50,
        entry_price=price,
        stop_loss=price * 0.98,
        take_profit=price * 1.02,
        market_condition=MarketCondition.RANGING,
        pattern_details="Unable to determine patterns",
        indicators_analysis="Analysis unavailable",
        ai_commentary=commentary or "Analysis could not be completed.",
        market_data=snapshot,
    )


class SignalService(SignalServiceInterface):
    """
    Signal Service using the hosted LLM gateway.

    Gateway errors (rate limit, payment, upstream failure) propagate;
    only a reply without a readable signal falls back to HOLD.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        """Lazy initialization of LLM client."""
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    @property
    def name(self) -> str:
        return "SignalService"

    async def execute(self, input_data: SignalRequest) -> SignalDecision:
        snapshot = input_data.market_data
        logger.info(f"Generating signal for {snapshot.symbol} ({input_data.asset_type})")

        response = await self.llm_client.generate(
            system_prompt=format_signal_prompt(snapshot, input_data.asset_type),
            user_prompt=SIGNAL_USER_PROMPT,
        )

        decision = parse_decision(response.content, market_data=snapshot)
        if decision is None:
            logger.warning(f"No usable signal in model reply for {snapshot.symbol}, holding")
            return fallback_decision(snapshot, response.content)

        logger.info(
            f"Signal for {snapshot.symbol}: {decision.signal.value} "
            f"({decision.confidence:.0f}%)"
        )
        return decision

    async def health_check(self) -> bool:
        """The gateway has no cheap ping; report whether it is configured."""
        return bool(self.llm_client.config.api_key)


async def generate_signal(snapshot: MarketSnapshot, asset_type: str) -> SignalDecision:
    """Generate a decision for a snapshot with the default service."""
    return await get_signal_service().execute(
        SignalRequest(market_data=snapshot, asset_type=asset_type)
    )


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
