"""
LLM Gateway Client

Calls an OpenAI-compatible chat completions endpoint (the hosted AI
gateway). Rate-limit responses are retried with exponential backoff;
malformed payloads are fatal.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union
import logging

import aiohttp
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from signaldesk.services.base import (
    ExternalAPIError,
    PaymentRequiredError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "LLMGateway"


@dataclass
class LLMConfig:
    """Configuration for the gateway client."""

    api_key: Optional[str]
    gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    model: str = "google/gemini-2.5-flash"
    timeout_seconds: float = 15.0
    max_attempts: int = 3
    backoff_min_seconds: float = 1.0
    backoff_max_seconds: float = 8.0


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    usage: dict = field(default_factory=dict)
    raw_response: Optional[dict] = None


class LLMClient:
    """Chat completions client for the hosted AI gateway."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            )
        return self._session

    async def _post(self, payload: dict) -> tuple[int, Any]:
        """POST the payload; returns (status, json body or error text)."""
        session = await self._ensure_session()
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with session.post(self.config.gateway_url, json=payload, headers=headers) as resp:
                if resp.status == 200:
                    return resp.status, await resp.json(content_type=None)
                return resp.status, await resp.text()
        except aiohttp.ClientError as e:
            logger.error(f"AI Gateway request error: {e}")
            raise ExternalAPIError(SERVICE_NAME, f"AI Gateway request failed: {e}") from e

    async def _generate_once(self, payload: dict) -> LLMResponse:
        status, body = await self._post(payload)

        if status == 429:
            logger.warning("AI Gateway rate limited")
            raise RateLimitError(SERVICE_NAME, "Rate limit exceeded. Please try again later.")
        if status == 402:
            raise PaymentRequiredError(
                SERVICE_NAME, "Payment required. Please add credits to your workspace."
            )
        if status != 200:
            logger.error(f"AI Gateway error: {status} {str(body)[:500]}")
            raise ExternalAPIError(
                SERVICE_NAME, f"AI Gateway error: {status}", details={"status": status}
            )

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalAPIError(SERVICE_NAME, "AI Gateway returned a malformed payload") from e
        if not isinstance(content, str):
            raise ExternalAPIError(SERVICE_NAME, "AI Gateway returned non-text content")

        return LLMResponse(
            content=content,
            model=body.get("model", self.config.model),
            usage=body.get("usage") or {},
            raw_response=body,
        )

    async def generate(
        self,
        system_prompt: str,
        user_prompt: Union[str, list[dict]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate a chat completion.

        ``user_prompt`` is either plain text or a list of content parts
        (``{"type": "text", ...}`` / ``{"type": "image_url", ...}``) for
        multimodal requests.

        Retries RateLimitError with exponential backoff, up to
        ``max_attempts``; every other error is raised immediately.
        """
        if not self.config.api_key:
            raise RuntimeError("LLM_API_KEY is not configured")

        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        retrying = AsyncRetrying(
            retry=retry_if_exception_type(RateLimitError),
            wait=wait_exponential(
                multiplier=self.config.backoff_min_seconds,
                min=self.config.backoff_min_seconds,
                max=self.config.backoff_max_seconds,
            ),
            stop=stop_after_attempt(self.config.max_attempts),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._generate_once(payload)
        raise RuntimeError("Unreachable generate")

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None


# Singleton instance management
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client singleton."""
    global _llm_client
    if _llm_client is None:
        from signaldesk.core.config import settings

        config = LLMConfig(
            api_key=settings.llm_api_key,
            gateway_url=settings.llm_gateway_url,
            model=settings.llm_model,
            timeout_seconds=settings.http_timeout_seconds,
            max_attempts=settings.llm_max_attempts,
            backoff_min_seconds=settings.llm_backoff_min_seconds,
            backoff_max_seconds=settings.llm_backoff_max_seconds,
        )
        _llm_client = LLMClient(config)
    return _llm_client
