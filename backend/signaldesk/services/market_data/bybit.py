"""
Bybit Market Data Client

Public v5 market endpoints (no authentication):
    GET /v5/market/kline    - candles, newest first
    GET /v5/market/tickers  - last price, 24h change and volume
    GET /v5/market/time     - server time (health check)
"""

import logging
from typing import Any, Optional

import aiohttp

from signaldesk.services.base import ExternalAPIError, RateLimitError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Bybit"


class BybitClient:
    """Thin aiohttp wrapper around Bybit's public market API."""

    def __init__(
        self,
        base_url: str = "https://api.bybit.com",
        category: str = "spot",
        timeout_seconds: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.category = category
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def _request(self, path: str, params: dict) -> dict:
        """GET a v5 endpoint and return its ``result`` object."""
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"

        try:
            async with session.get(url, params=params) as resp:
                if resp.status == 429:
                    raise RateLimitError(SERVICE_NAME, "Rate limit exceeded")
                if resp.status != 200:
                    text = await resp.text()
                    logger.error(f"Bybit {path} failed: {resp.status} {text[:200]}")
                    raise ExternalAPIError(
                        SERVICE_NAME,
                        f"Bybit API error: {resp.status}",
                        details={"status": resp.status},
                    )
                payload = await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"Bybit request error for {path}: {e}")
            raise ExternalAPIError(SERVICE_NAME, f"Bybit request failed: {e}") from e

        if not isinstance(payload, dict):
            raise ExternalAPIError(SERVICE_NAME, "Bybit returned a non-object payload")
        if payload.get("retCode") != 0:
            raise ExternalAPIError(
                SERVICE_NAME,
                f"Bybit API error: {payload.get('retMsg', 'unknown error')}",
                details={"retCode": payload.get("retCode")},
            )
        result = payload.get("result")
        if not isinstance(result, dict):
            raise ExternalAPIError(SERVICE_NAME, "Bybit response has no result")
        return result

    async def get_klines(self, symbol: str, interval: str, limit: int) -> list[list[Any]]:
        """Raw kline rows, newest first (as Bybit returns them)."""
        result = await self._request(
            "/v5/market/kline",
            {
                "category": self.category,
                "symbol": symbol,
                "interval": interval,
                "limit": limit,
            },
        )
        rows = result.get("list")
        if not isinstance(rows, list):
            raise ExternalAPIError(SERVICE_NAME, "Kline response has no list")
        return rows

    async def get_ticker(self, symbol: str) -> dict:
        """Ticker entry for one symbol."""
        result = await self._request(
            "/v5/market/tickers",
            {"category": self.category, "symbol": symbol},
        )
        items = result.get("list")
        if not items:
            raise ExternalAPIError(SERVICE_NAME, f"No ticker returned for {symbol}")
        return items[0]

    async def ping(self) -> bool:
        """Check Bybit API connectivity."""
        try:
            await self._request("/v5/market/time", {})
            return True
        except ExternalAPIError as e:
            logger.error(f"Bybit health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
