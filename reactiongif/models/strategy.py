"""Search strategy and selection models.

These double as the output schemas the language model must satisfy, so the
field descriptions are written as instructions to the model.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Perspective(str, Enum):
    """Interpretive angle a strategy takes on the user's text."""

    EMOTIONAL = "emotional"
    LITERAL = "literal"
    SARCASTIC = "sarcastic"


class SearchStrategy(BaseModel):
    """A keyword + topic search plan."""

    keywords: list[str] = Field(
        ...,
        min_length=1,
        max_length=3,
        description=(
            "1-3 reaction keywords (emotions, gestures, expressions like "
            "'facepalm', 'mind blown', 'celebration')"
        ),
    )
    topic: str | None = Field(
        default=None,
        description=(
            "Optional topic/context keyword (e.g. 'coding', 'coffee', 'monday') - "
            "only include if it would genuinely improve the GIF search, otherwise null"
        ),
    )
    reasoning: str = Field(..., description="Brief explanation of why these keywords were chosen")

    @property
    def search_query(self) -> str:
        """Keywords joined by spaces, followed by the topic when there is one."""
        query = " ".join(self.keywords)
        if self.topic:
            return f"{query} {self.topic}"
        return query

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "keywords": ["relief", "celebration"],
                "topic": "coding",
                "reasoning": "Finally compiling code is a moment of relief and celebration",
            }
        }


class PerspectiveStrategy(SearchStrategy):
    """A search strategy tagged with the perspective it was derived from."""

    perspective: Perspective = Field(
        ..., description="Which perspective this strategy interprets the text from"
    )


class PerspectiveStrategySet(BaseModel):
    """Exactly one strategy per perspective."""

    strategies: list[PerspectiveStrategy] = Field(
        ...,
        min_length=len(Perspective),
        max_length=len(Perspective),
        description="One strategy for each of: emotional, literal, sarcastic",
    )

    @field_validator("strategies")
    @classmethod
    def one_per_perspective(cls, strategies: list[PerspectiveStrategy]) -> list[PerspectiveStrategy]:
        seen = {strategy.perspective for strategy in strategies}
        if seen != set(Perspective):
            missing = sorted(p.value for p in set(Perspective) - seen)
            raise ValueError(f"each perspective must appear exactly once, missing: {missing}")
        return strategies


class Selection(BaseModel):
    """The ranker's pick from a candidate list."""

    selected_index: int = Field(
        ...,
        ge=0,
        alias="selectedIndex",
        description="The index (0-based) of the best GIF from the list",
    )
    reasoning: str = Field(..., description="Brief explanation of why this GIF was selected")

    model_config = {"populate_by_name": True}
