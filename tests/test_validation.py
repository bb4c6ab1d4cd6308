import pytest

from article_drafter.api.schemas import Tone
from article_drafter.service.validation import (
    BODY_INVALID,
    KEY_POINTS_REQUIRED,
    KEY_POINTS_TOO_LONG,
    TONE_INVALID,
    TOPIC_REQUIRED,
    TOPIC_TOO_LONG,
    InputValidationError,
    validate_generation_payload,
)

VALID = {"topic": "Remote Work", "keyPoints": "productivity, isolation", "tone": "casual"}


def _error_for(payload) -> str:
    with pytest.raises(InputValidationError) as info:
        validate_generation_payload(payload)
    return info.value.message


@pytest.mark.parametrize("topic", [None, "", "   \n", 42, ["Remote Work"]])
def test_topic_required(topic) -> None:
    assert _error_for({**VALID, "topic": topic}) == TOPIC_REQUIRED


def test_topic_length_uses_trimmed_value() -> None:
    assert validate_generation_payload({**VALID, "topic": "  " + "t" * 200 + "  "}).topic == "t" * 200
    assert _error_for({**VALID, "topic": "t" * 201}) == TOPIC_TOO_LONG


@pytest.mark.parametrize("key_points", [None, "", "\t", 3.5])
def test_key_points_required(key_points) -> None:
    assert _error_for({**VALID, "keyPoints": key_points}) == KEY_POINTS_REQUIRED


def test_key_points_length() -> None:
    assert _error_for({**VALID, "keyPoints": "k" * 2001}) == KEY_POINTS_TOO_LONG
    assert len(validate_generation_payload({**VALID, "keyPoints": "k" * 2000}).key_points) == 2000


@pytest.mark.parametrize("tone", [None, "", "Casual", "sarcastic", 1])
def test_tone_must_be_allowed_value(tone) -> None:
    assert _error_for({**VALID, "tone": tone}) == TONE_INVALID


def test_first_failing_rule_wins() -> None:
    payload = {"topic": "t" * 300, "keyPoints": "", "tone": "nope"}
    assert _error_for(payload) == TOPIC_TOO_LONG
    assert _error_for({**payload, "topic": "ok"}) == KEY_POINTS_REQUIRED


@pytest.mark.parametrize("payload", [None, [], "topic", 7])
def test_non_object_body_is_rejected(payload) -> None:
    assert _error_for(payload) == BODY_INVALID


def test_empty_object_fails_topic_rule() -> None:
    assert _error_for({}) == TOPIC_REQUIRED


def test_valid_payload_is_trimmed() -> None:
    request = validate_generation_payload({"topic": " AI ", "keyPoints": "\n a, b \n", "tone": "academic"})
    assert request.topic == "AI"
    assert request.key_points == "a, b"
    assert request.tone is Tone.ACADEMIC


def test_tone_message_lists_all_tones() -> None:
    assert TONE_INVALID == "Tone must be one of: professional, casual, academic, creative, conversational"
