import logging
from dataclasses import dataclass
from typing import Any, Protocol

from article_drafter.config import Settings, get_settings
from article_drafter.providers.llm.claude import AnthropicProvider
from article_drafter.providers.llm.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderFailure,
    ProviderRateLimited,
    ProviderTimeout,
    classify_provider_error,
)
from article_drafter.service.prompting import build_article_prompt
from article_drafter.service.validation import InputValidationError, validate_generation_payload

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "ANTHROPIC_API_KEY is not configured. Please add it to your environment variables."
EMPTY_CONTENT_FALLBACK = "Failed to generate article content"
GENERIC_FAILURE = "Failed to generate article. Please try again later."

_FAILURE_RESPONSES: dict[type[ProviderError], tuple[str, int]] = {
    ProviderAuthError: (
        "Invalid Anthropic API key. Please check your ANTHROPIC_API_KEY environment variable.",
        500,
    ),
    ProviderRateLimited: ("Rate limit exceeded. Please wait a moment and try again.", 429),
    ProviderTimeout: ("Request timeout. The AI took too long to respond. Please try again.", 504),
    ProviderFailure: (GENERIC_FAILURE, 500),
}


class CompletionProvider(Protocol):
    async def create_message(self, prompt: str) -> list[Any]: ...


@dataclass(frozen=True)
class GenerationResult:
    article: str = ""
    error: str | None = None
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_payload(self) -> dict[str, str]:
        if self.error is not None:
            return {"error": self.error}
        return {"article": self.article}


class GenerateService:
    def __init__(self, settings: Settings | None = None, provider: CompletionProvider | None = None) -> None:
        self.settings = settings or get_settings()
        self.provider = provider or AnthropicProvider(self.settings)

    async def generate(self, payload: Any) -> GenerationResult:
        try:
            request = validate_generation_payload(payload)
        except InputValidationError as exc:
            logger.info("generate.validation_failed reason=%s", exc.message)
            return GenerationResult(error=exc.message, status_code=400)

        if not self.settings.api_key_configured:
            logger.error("generate.not_configured env=ANTHROPIC_API_KEY")
            return GenerationResult(error=NOT_CONFIGURED, status_code=500)

        prompt = build_article_prompt(request)
        logger.info(
            "generate.start topic=%s tone=%s key_points_chars=%d",
            request.topic,
            request.tone.value,
            len(request.key_points),
        )
        try:
            blocks = await self.provider.create_message(prompt)
        except Exception as exc:
            failure = classify_provider_error(exc)
            logger.error("generate.failed kind=%s detail=%s", failure.__class__.__name__, failure.detail)
            return self.failure_result(failure)

        article = self._first_text(blocks)
        if article is None:
            logger.warning("generate.no_text_block blocks=%d", len(blocks))
            article = EMPTY_CONTENT_FALLBACK
        logger.info("generate.done topic=%s article_chars=%d", request.topic, len(article))
        return GenerationResult(article=article)

    @staticmethod
    def failure_result(exc: ProviderError) -> GenerationResult:
        message, status_code = _FAILURE_RESPONSES.get(type(exc), (GENERIC_FAILURE, 500))
        return GenerationResult(error=message, status_code=status_code)

    @staticmethod
    def _first_text(blocks: list[Any]) -> str | None:
        for block in blocks:
            if isinstance(block, dict):
                block_type, text = block.get("type"), block.get("text")
            else:
                block_type, text = getattr(block, "type", None), getattr(block, "text", None)
            if block_type == "text" and isinstance(text, str):
                return text
        return None
