"""
Chart Analysis API Endpoints

Signal read off an uploaded chart image.
"""

import logging

from fastapi import APIRouter, HTTPException

from signaldesk.api.v1.errors import to_http_exception
from signaldesk.schemas.signal import ChartAnalysisRequest, SignalDecision
from signaldesk.services.base import ServiceError
from signaldesk.services.llm import analyze_chart

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze-chart", response_model=SignalDecision)
async def analyze_chart_image(request: ChartAnalysisRequest):
    """Analyze a chart image (URL or data URI) and return a trading signal."""
    try:
        return await analyze_chart(request.image_url, request.asset_type)
    except ServiceError as e:
        logger.error(f"Error in chart analysis endpoint: {e}")
        raise to_http_exception(e) from e
    except RuntimeError as e:
        logger.error(f"Chart analysis unavailable: {e}")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
