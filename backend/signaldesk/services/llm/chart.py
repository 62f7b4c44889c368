"""
Chart Analysis Service

Sends an uploaded chart image to the multimodal LLM gateway and reads a
BUY/SELL/HOLD decision off its reply. No indicator snapshot is involved,
so levels are whatever the model reads from the image (or None).
"""

import logging
from typing import Optional

from signaldesk.schemas.signal import (
    ChartAnalysisRequest,
    MarketCondition,
    SignalDecision,
    SignalType,
)
from signaldesk.services.llm.client import LLMClient, get_llm_client
from signaldesk.services.llm.interface import ChartAnalysisServiceInterface
from signaldesk.services.llm.prompts import chart_user_content, format_chart_prompt
from signaldesk.services.llm.signal import parse_decision

logger = logging.getLogger(__name__)


def chart_fallback_decision(commentary: str = "") -> SignalDecision:
    """HOLD with no price levels, used when the reply cannot be parsed."""
    return SignalDecision(
        signal=SignalType.HOLD,
        confidence=50,
        entry_price=None,
        stop_loss=None,
        take_profit=None,
        market_condition=MarketCondition.RANGING,
        pattern_details="Unable to determine patterns",
        indicators_analysis="Chart analysis unavailable",
        ai_commentary=commentary or "Analysis could not be completed.",
    )


class ChartAnalysisService(ChartAnalysisServiceInterface):
    """Chart image analysis through the hosted LLM gateway."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    async def execute(self, input_data: ChartAnalysisRequest) -> SignalDecision:
        logger.info(f"Analyzing chart ({input_data.asset_type})")

        response = await self.llm_client.generate(
            system_prompt=format_chart_prompt(input_data.asset_type),
            user_prompt=chart_user_content(input_data.image_url),
        )

        decision = parse_decision(response.content)
        if decision is None:
            logger.warning("No usable signal in chart analysis reply, holding")
            return chart_fallback_decision(response.content)

        logger.info(f"Chart signal: {decision.signal.value} ({decision.confidence:.0f}%)")
        return decision

    async def health_check(self) -> bool:
        return bool(self.llm_client.config.api_key)


async def analyze_chart(image_url: str, asset_type: str) -> SignalDecision:
    """Analyze a chart image with the default service."""
    return await get_chart_analysis_service().execute(
        ChartAnalysisRequest(image_url=image_url, asset_type=asset_type)
    )


# Singleton instance
_service_instance: Optional[ChartAnalysisService] = None


def get_chart_analysis_service() -> ChartAnalysisService:
    """Get or create chart analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ChartAnalysisService()
    return _service_instance
