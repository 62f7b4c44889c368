"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "SignalDesk Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:5173"
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Bybit public market API
    bybit_base_url: str = "https://api.bybit.com"
    bybit_category: str = "spot"
    allowed_symbols: list[str] = [
        "BTCUSDT",
        "ETHUSDT",
        "SOLUSDT",
        "XRPUSDT",
        "BNBUSDT",
        "ADAUSDT",
        "DOGEUSDT",
        "MATICUSDT",
    ]
    allowed_intervals: list[str] = ["1", "5", "15", "30", "60", "240", "D"]
    max_kline_limit: int = 500
    candles_returned: int = 50

    # HTTP
    http_timeout_seconds: float = 15.0

    # LLM gateway (OpenAI-compatible chat completions)
    llm_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    llm_api_key: Optional[str] = None
    llm_model: str = "google/gemini-2.5-flash"
    llm_max_attempts: int = 3
    llm_backoff_min_seconds: float = 1.0
    llm_backoff_max_seconds: float = 8.0

    # Indicator periods
    ema_fast_period: int = 20
    ema_slow_period: int = 50
    rsi_period: int = 14
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
