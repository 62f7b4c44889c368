"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from signaldesk.api.v1.endpoints import chart, market, signal

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, tags=["Market Data"])
router.include_router(signal.router, tags=["Signals"])
router.include_router(chart.router, tags=["Chart Analysis"])
