import anthropic
import httpx

ERROR_LOG_LIMIT = 1000


class ProviderError(Exception):
    """Base class for failures raised by the completion provider call."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ProviderAuthError(ProviderError):
    pass


class ProviderRateLimited(ProviderError):
    pass


class ProviderTimeout(ProviderError):
    pass


class ProviderFailure(ProviderError):
    pass


# Typed matches (exception class or status) across all rules win over message
# substrings; within each pass the first matching rule decides the variant.
_RULES: tuple[tuple[type[ProviderError], tuple[type[BaseException], ...], int | None, tuple[str, ...]], ...] = (
    (ProviderAuthError, (anthropic.AuthenticationError,), 401, ("401", "authentication")),
    (ProviderRateLimited, (anthropic.RateLimitError,), 429, ("429", "rate limit")),
    (ProviderTimeout, (anthropic.APITimeoutError, httpx.TimeoutException), None, ("timeout",)),
)


def classify_provider_error(exc: BaseException) -> ProviderError:
    if isinstance(exc, ProviderError):
        return exc
    detail = describe_error(exc)
    message = str(exc).lower()
    status_code = getattr(exc, "status_code", None)
    for variant, exc_types, status, _ in _RULES:
        if isinstance(exc, exc_types) or (status is not None and status_code == status):
            return variant(detail)
    for variant, _, _, needles in _RULES:
        if any(needle in message for needle in needles):
            return variant(detail)
    return ProviderFailure(detail)


def describe_error(exc: BaseException) -> str:
    status_code = getattr(exc, "status_code", None)
    message = getattr(exc, "message", None) or str(exc)
    body = getattr(exc, "body", None)
    details = [f"type={exc.__class__.__name__}"]
    if status_code is not None:
        details.append(f"status_code={status_code}")
    if body is not None:
        details.append(f"body={body}")
    details.append(f"message={message}")
    return _clip(" ".join(details), ERROR_LOG_LIMIT)


def _clip(text: str, limit: int) -> str:
    normalized = " ".join(text.split()).strip()
    if len(normalized) <= limit:
        return normalized
    return f"{normalized[:limit]}...(truncated)"
