"""
LLM Signal Services

CONTRACT:
    Input:  SignalRequest (MarketSnapshot + asset type)
            ChartAnalysisRequest (chart image + asset type)
    Output: SignalDecision

RESPONSIBILITIES:
    - Format the snapshot (or chart image) into the analyst prompt
    - Call the hosted AI gateway (retry on rate limit)
    - Parse BUY / SELL / HOLD, levels and commentary from the reply

CRITICAL RULES:
    - LLM does NO math - all snapshot numbers come from Indicator Engine
    - Replies without a readable signal degrade to HOLD, never to an error
"""

from signaldesk.services.llm.chart import (
    ChartAnalysisService,
    analyze_chart,
    chart_fallback_decision,
    get_chart_analysis_service,
)
from signaldesk.services.llm.client import (
    LLMClient,
    LLMConfig,
    LLMResponse,
    get_llm_client,
)
from signaldesk.services.llm.interface import (
    ChartAnalysisServiceInterface,
    SignalServiceInterface,
)
from signaldesk.services.llm.signal import (
    SignalService,
    extract_json_object,
    fallback_decision,
    generate_signal,
    get_signal_service,
    parse_decision,
)

__all__ = [
    # Interfaces
    "SignalServiceInterface",
    "ChartAnalysisServiceInterface",
    # Client
    "LLMClient",
    "LLMConfig",
    "LLMResponse",
    "get_llm_client",
    # Services
    "SignalService",
    "get_signal_service",
    "generate_signal",
    "ChartAnalysisService",
    "get_chart_analysis_service",
    "analyze_chart",
    # Parsing
    "extract_json_object",
    "parse_decision",
    "fallback_decision",
    "chart_fallback_decision",
]
