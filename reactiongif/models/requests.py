"""API request models."""

from typing import Any

from pydantic import BaseModel, Field

from reactiongif.utils.exceptions import ValidationError

TEXT_REQUIRED = "Text input is required"


class GenerateRequest(BaseModel):
    """Request for reaction GIF generation."""

    text: str = Field(
        ...,
        min_length=1,
        description="Situation or feeling to react to",
    )

    @classmethod
    def from_body(cls, body: Any) -> "GenerateRequest":
        """Build from a decoded JSON body.

        Missing, null, empty or non-string ``text`` is a 400 rather than the
        framework's 422, so the body is checked by hand.

        Raises:
            ValidationError: If ``text`` is unusable
        """
        text = body.get("text") if isinstance(body, dict) else None
        if not text or not isinstance(text, str):
            raise ValidationError(TEXT_REQUIRED, field="text")
        return cls(text=text)

    class Config:
        """Pydantic config."""

        json_schema_extra = {"example": {"text": "when my code finally compiles"}}
