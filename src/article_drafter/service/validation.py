from collections.abc import Mapping
from typing import Any

from article_drafter.api.schemas import KEY_POINTS_MAX_CHARS, TONES, TOPIC_MAX_CHARS, GenerateRequest

BODY_INVALID = "Request body must be a JSON object with topic, keyPoints and tone"
TOPIC_REQUIRED = "Topic is required and must be a non-empty string"
TOPIC_TOO_LONG = f"Topic must be {TOPIC_MAX_CHARS} characters or less"
KEY_POINTS_REQUIRED = "Key points are required and must be a non-empty string"
KEY_POINTS_TOO_LONG = f"Key points must be {KEY_POINTS_MAX_CHARS} characters or less"
TONE_INVALID = f"Tone must be one of: {', '.join(TONES)}"


class InputValidationError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def validate_generation_payload(payload: Any) -> GenerateRequest:
    """Check a raw request body in a fixed order; the first failing rule wins.

    The body comes straight from the network, so nothing about its shape is
    assumed. Anything other than a JSON object, including a body that did not
    parse, is rejected before the field rules run.
    """
    if not isinstance(payload, Mapping):
        raise InputValidationError(BODY_INVALID)
    data: Mapping[str, Any] = payload

    topic = data.get("topic")
    if not isinstance(topic, str) or not topic.strip():
        raise InputValidationError(TOPIC_REQUIRED)
    if len(topic.strip()) > TOPIC_MAX_CHARS:
        raise InputValidationError(TOPIC_TOO_LONG)

    key_points = data.get("keyPoints")
    if not isinstance(key_points, str) or not key_points.strip():
        raise InputValidationError(KEY_POINTS_REQUIRED)
    if len(key_points.strip()) > KEY_POINTS_MAX_CHARS:
        raise InputValidationError(KEY_POINTS_TOO_LONG)

    tone = data.get("tone")
    if not isinstance(tone, str) or tone not in TONES:
        raise InputValidationError(TONE_INVALID)

    return GenerateRequest(topic=topic.strip(), key_points=key_points.strip(), tone=tone)
