"""Tests for the LLM gateway client retry policy."""

import pytest

from signaldesk.services.base import ExternalAPIError, PaymentRequiredError, RateLimitError
from signaldesk.services.llm import LLMClient, LLMConfig

OK_BODY = {
    "model": "google/gemini-2.5-flash",
    "choices": [{"message": {"role": "assistant", "content": '{"signal": "BUY"}'}}],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5},
}


def make_client(max_attempts=3):
    return LLMClient(
        LLMConfig(
            api_key="test-key",
            max_attempts=max_attempts,
            backoff_min_seconds=0,
            backoff_max_seconds=0,
        )
    )


def scripted_post(client, monkeypatch, responses):
    calls = []

    async def mock_post(payload):
        calls.append(payload)
        return responses[min(len(calls), len(responses)) - 1]

    monkeypatch.setattr(client, "_post", mock_post)
    return calls


@pytest.mark.asyncio
async def test_generate_returns_content(monkeypatch):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(200, OK_BODY)])

    response = await client.generate("system", "user", temperature=0.2)

    assert response.content == '{"signal": "BUY"}'
    assert response.usage["prompt_tokens"] == 10
    payload = calls[0]
    assert payload["model"] == "google/gemini-2.5-flash"
    assert payload["messages"][0] == {"role": "system", "content": "system"}
    assert payload["messages"][1] == {"role": "user", "content": "user"}
    assert payload["temperature"] == 0.2
    assert "max_tokens" not in payload


@pytest.mark.asyncio
async def test_rate_limit_is_retried(monkeypatch):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(429, "slow down"), (429, "slow down"), (200, OK_BODY)])

    response = await client.generate("system", "user")

    assert len(calls) == 3
    assert response.content == '{"signal": "BUY"}'


@pytest.mark.asyncio
async def test_rate_limit_gives_up_after_max_attempts(monkeypatch):
    client = make_client(max_attempts=2)
    calls = scripted_post(client, monkeypatch, [(429, "slow down")])

    with pytest.raises(RateLimitError):
        await client.generate("system", "user")
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_payment_required_is_not_retried(monkeypatch):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(402, "no credits")])

    with pytest.raises(PaymentRequiredError):
        await client.generate("system", "user")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_server_error_is_not_retried(monkeypatch):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(500, "boom")])

    with pytest.raises(ExternalAPIError) as exc:
        await client.generate("system", "user")
    assert exc.value.details == {"status": 500}
    assert len(calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        ["not", "an", "object"],
    ],
)
async def test_malformed_payload_is_fatal(monkeypatch, body):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(200, body)])

    with pytest.raises(ExternalAPIError):
        await client.generate("system", "user")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_missing_api_key():
    client = LLMClient(LLMConfig(api_key=None))
    with pytest.raises(RuntimeError, match="not configured"):
        await client.generate("system", "user")


@pytest.mark.asyncio
async def test_multimodal_user_content_is_sent_as_is(monkeypatch):
    client = make_client()
    calls = scripted_post(client, monkeypatch, [(200, OK_BODY)])
    content = [
        {"type": "text", "text": "Analyze this chart"},
        {"type": "image_url", "image_url": {"url": "https://charts.example.test/a.png"}},
    ]

    await client.generate("system", content)

    assert calls[0]["messages"][1] == {"role": "user", "content": content}
