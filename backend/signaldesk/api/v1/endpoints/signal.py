"""
Signal API Endpoints

LLM-generated BUY/SELL/HOLD decision for an indicator snapshot.
"""

import logging

from fastapi import APIRouter, HTTPException

from signaldesk.api.v1.errors import to_http_exception
from signaldesk.schemas.signal import SignalDecision, SignalRequest
from signaldesk.services.base import ServiceError
from signaldesk.services.llm import generate_signal

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signal", response_model=SignalDecision)
async def create_signal(request: SignalRequest):
    """
    Generate a trading signal from market data.

    The decision echoes the market data it was based on.
    """
    try:
        return await generate_signal(request.market_data, request.asset_type)
    except ServiceError as e:
        logger.error(f"Error in signal endpoint: {e}")
        raise to_http_exception(e) from e
    except RuntimeError as e:
        logger.error(f"Signal service unavailable: {e}")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
