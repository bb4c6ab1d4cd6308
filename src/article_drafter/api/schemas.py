from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

TOPIC_MAX_CHARS = 200
KEY_POINTS_MAX_CHARS = 2000


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    CREATIVE = "creative"
    CONVERSATIONAL = "conversational"


TONES: tuple[str, ...] = tuple(tone.value for tone in Tone)


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    topic: str = Field(..., min_length=1, max_length=TOPIC_MAX_CHARS, description="Article topic, trimmed.")
    key_points: str = Field(
        ...,
        alias="keyPoints",
        min_length=1,
        max_length=KEY_POINTS_MAX_CHARS,
        description="Points the draft must cover, trimmed.",
    )
    tone: Tone = Field(default=Tone.PROFESSIONAL, description="Writing tone.")


class GenerateResponse(BaseModel):
    article: str


class ErrorResponse(BaseModel):
    error: str
