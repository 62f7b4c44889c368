"""
LLM Service Interfaces

Defines the contracts for snapshot signals and chart image analysis.
"""

from abc import abstractmethod

from signaldesk.services.base import BaseService
from signaldesk.schemas.signal import ChartAnalysisRequest, SignalDecision, SignalRequest


class SignalServiceInterface(BaseService[SignalRequest, SignalDecision]):
    """
    Signal Service Contract (LLM layer).

    INPUT: SignalRequest
        - market_data: MarketSnapshot from the Indicator Engine
        - asset_type: Market the symbol belongs to (crypto, forex, ...)

    OUTPUT: SignalDecision
        - signal: BUY / SELL / HOLD
        - confidence: 0-100
        - entry_price / stop_loss / take_profit
        - market_condition + narrative fields
        - market_data: the snapshot the decision was based on

    RULES:
        - NEVER do math - all numbers are from the snapshot
        - Unparseable model output degrades to a HOLD decision
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: SignalRequest) -> SignalDecision:
        """Generate a trading signal from the snapshot."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check LLM configuration."""
        pass


class ChartAnalysisServiceInterface(BaseService[ChartAnalysisRequest, SignalDecision]):
    """
    Chart Analysis Service Contract (LLM layer).

    INPUT: ChartAnalysisRequest
        - image_url: chart image (URL or data URI)
        - asset_type: Market the chart belongs to

    OUTPUT: SignalDecision without market_data; price levels may be None

    RULES:
        - Unparseable model output degrades to HOLD with no levels
    """

    @property
    def name(self) -> str:
        return "ChartAnalysisService"

    @abstractmethod
    async def execute(self, input_data: ChartAnalysisRequest) -> SignalDecision:
        """Read a trading signal off a chart image."""
        pass
