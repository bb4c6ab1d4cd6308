import asyncio
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from article_drafter.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, Settings
from article_drafter.providers.llm.claude import AnthropicProvider
from article_drafter.providers.llm.errors import (
    ProviderAuthError,
    ProviderFailure,
    ProviderRateLimited,
    ProviderTimeout,
    classify_provider_error,
)

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, status: int, message: str):
    return cls(message, response=httpx.Response(status, request=_REQUEST), body={"type": "error"})


@pytest.mark.parametrize(
    ("exc", "variant"),
    [
        (_status_error(anthropic.AuthenticationError, 401, "invalid x-api-key"), ProviderAuthError),
        (_status_error(anthropic.RateLimitError, 429, "slow down"), ProviderRateLimited),
        (anthropic.APITimeoutError(request=_REQUEST), ProviderTimeout),
        (httpx.ReadTimeout("read", request=_REQUEST), ProviderTimeout),
        (_status_error(anthropic.InternalServerError, 500, "overloaded"), ProviderFailure),
        (RuntimeError("Authentication failed"), ProviderAuthError),
        (RuntimeError("upstream says 429"), ProviderRateLimited),
        (ValueError("boom"), ProviderFailure),
    ],
)
def test_classify_provider_error(exc: Exception, variant: type) -> None:
    assert type(classify_provider_error(exc)) is variant


def test_classification_keeps_documented_precedence() -> None:
    assert type(classify_provider_error(RuntimeError("401 then 429 then timeout"))) is ProviderAuthError
    assert type(classify_provider_error(RuntimeError("429 then timeout"))) is ProviderRateLimited


def test_typed_rate_limit_wins_over_auth_substring_in_body() -> None:
    exc = _status_error(
        anthropic.RateLimitError,
        429,
        "Error code: 429 - {'type': 'error', 'request_id': 'req_011CX401ab'}",
    )
    assert type(classify_provider_error(exc)) is ProviderRateLimited


def test_status_code_wins_over_earlier_substring() -> None:
    exc = _status_error(anthropic.APIStatusError, 429, "authentication header echoed")
    assert type(classify_provider_error(exc)) is ProviderRateLimited


def test_classified_error_is_returned_unchanged() -> None:
    exc = ProviderTimeout("detail")
    assert classify_provider_error(exc) is exc


def test_detail_carries_status_and_message() -> None:
    failure = classify_provider_error(_status_error(anthropic.RateLimitError, 429, "slow down"))
    assert "status_code=429" in failure.detail
    assert "slow down" in failure.detail


class _FakeMessages:
    def __init__(self, response=None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.response


def _provider(messages: _FakeMessages) -> AnthropicProvider:
    provider = AnthropicProvider(Settings(ANTHROPIC_API_KEY="test-key"))
    provider._client = SimpleNamespace(messages=messages)  # type: ignore[assignment]
    return provider


def test_create_message_sends_single_user_message() -> None:
    block = SimpleNamespace(type="text", text="# Draft")
    messages = _FakeMessages(response=SimpleNamespace(content=[block], stop_reason="end_turn"))

    content = asyncio.run(_provider(messages).create_message("prompt text"))

    assert content == [block]
    assert messages.calls == [
        {
            "model": DEFAULT_MODEL,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "messages": [{"role": "user", "content": "prompt text"}],
        }
    ]


def test_create_message_raises_tagged_error() -> None:
    messages = _FakeMessages(exc=_status_error(anthropic.RateLimitError, 429, "rate limit exceeded"))

    with pytest.raises(ProviderRateLimited) as info:
        asyncio.run(_provider(messages).create_message("prompt"))
    assert isinstance(info.value.__cause__, anthropic.RateLimitError)


def test_client_is_built_without_retries() -> None:
    settings = Settings(ANTHROPIC_API_KEY="test-key", ANTHROPIC_BASE_URL="http://localhost:9999")
    client = AnthropicProvider(settings)._get_client()
    assert client.max_retries == 0
    assert str(client.base_url).startswith("http://localhost:9999")
