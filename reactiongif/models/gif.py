"""GIF candidate and result models."""

from pydantic import BaseModel, Field

from reactiongif.models.strategy import Perspective


class GifCandidate(BaseModel):
    """One GIF record returned by the search provider, not yet ranked."""

    id: str = Field(..., description="Provider identifier")
    title: str = Field(default="", description="GIF title")
    alt_text: str | None = Field(default=None, description="Accessibility description")
    media_url: str = Field(..., description="URL of the original rendition")


class GifResult(BaseModel):
    """A selected GIF returned to the client."""

    url: str
    keywords: list[str]
    topic: str | None
    reasoning: str
    title: str

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "url": "https://media.giphy.com/media/abc123/giphy.gif",
                "keywords": ["relief", "celebration"],
                "topic": "coding",
                "reasoning": "The dancing programmer captures the joy of a clean build",
                "title": "Happy Dance GIF",
            }
        }


class PerspectiveGifResult(GifResult):
    """A selected GIF tagged with its originating perspective."""

    perspective: Perspective


class PerspectiveGifResponse(BaseModel):
    """Response body of the multi-perspective variant."""

    gifs: list[PerspectiveGifResult] = Field(default_factory=list)
