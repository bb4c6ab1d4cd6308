import logging
from typing import Any

from anthropic import AsyncAnthropic

from article_drafter.config import Settings
from article_drafter.providers.llm.errors import classify_provider_error

logger = logging.getLogger(__name__)


class AnthropicProvider:
    """Single-shot Messages API call with compact IO logs."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.model = settings.anthropic_model
        self.max_tokens = settings.anthropic_max_tokens
        self._client: AsyncAnthropic | None = None

    async def create_message(self, prompt: str) -> list[Any]:
        """Send one user message and return the response content blocks.

        Any failure of the call is re-raised as a ``ProviderError`` variant.
        """
        logger.info(
            "llm.call model=%s max_tokens=%d timeout=%.1fs prompt_chars=%d",
            self.model,
            self.max_tokens,
            self.settings.llm_timeout_seconds,
            len(prompt),
        )
        try:
            message = await self._get_client().messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            raise classify_provider_error(exc) from exc
        content = list(getattr(message, "content", None) or [])
        logger.info(
            "llm.response model=%s blocks=%d stop_reason=%s",
            self.model,
            len(content),
            getattr(message, "stop_reason", None),
        )
        return content

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(
                api_key=self.settings.anthropic_api_key,
                base_url=self.settings.anthropic_base_url or None,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        return self._client
