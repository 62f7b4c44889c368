"""
SignalDesk Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from signaldesk.core.config import settings
from signaldesk.core.logging import configure_logging
from signaldesk.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    if not settings.llm_api_key:
        logger.warning("LLM_API_KEY not configured - signal generation disabled")

    yield

    # Shutdown
    logger.info("Shutting down...")
    from signaldesk.services.market_data import get_market_data_service
    from signaldesk.services.llm import get_llm_client

    await get_market_data_service().close()
    await get_llm_client().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    SignalDesk Trading Chart API

    ## Architecture
    - **Market Data**: Live candles and ticker from Bybit
    - **Indicator Engine**: EMA, RSI, MACD, Bollinger Bands, VWAP (pure Python/NumPy)
    - **Signal Layer**: LLM-generated BUY/SELL/HOLD with price levels
    - **Chart Analysis**: multimodal LLM read of an uploaded chart image

    ## Core Principles
    - AI interprets, never calculates
    - Degenerate data is rejected, never turned into NaN
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
cors_origins = [settings.frontend_url]
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "SignalDesk Backend API",
        "docs": "/docs",
        "health": "/health",
    }
