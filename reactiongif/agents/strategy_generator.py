"""Keyword strategy generation agents."""

from reactiongif.agents.base import BaseAgent
from reactiongif.agents.prompts import (
    KEYWORDS_PROMPT,
    PERSPECTIVES_PROMPT,
    STRATEGY_SYSTEM_PROMPT,
    format_perspective_guidance,
)
from reactiongif.models.strategy import (
    Perspective,
    PerspectiveStrategy,
    PerspectiveStrategySet,
    SearchStrategy,
)
from reactiongif.services.protocols import TextCompletionModel


class KeywordStrategyAgent(BaseAgent[str, SearchStrategy]):
    """Derives a single keyword search strategy from free text.

    Schema violations from the model propagate; there is no fallback query.
    """

    name = "keyword_strategy"

    def __init__(self, completion_model: TextCompletionModel, model: str | None = None):
        """Initialize the agent.

        Args:
            completion_model: Client producing schema-validated completions
            model: Model identifier for this call site
        """
        super().__init__()
        self.completion_model = completion_model
        self.model = model

    async def process(self, input_data: str) -> SearchStrategy:
        strategy = await self.completion_model.complete_structured(
            prompt=KEYWORDS_PROMPT.format(text=input_data),
            schema=SearchStrategy,
            model=self.model,
            system_prompt=STRATEGY_SYSTEM_PROMPT,
        )
        self.logger.info(
            "strategy_generated",
            keywords=strategy.keywords,
            topic=strategy.topic,
        )
        return strategy


class PerspectiveStrategyAgent(BaseAgent[str, list[PerspectiveStrategy]]):
    """Derives one strategy per perspective from free text."""

    name = "perspective_strategy"

    def __init__(self, completion_model: TextCompletionModel, model: str | None = None):
        super().__init__()
        self.completion_model = completion_model
        self.model = model

    async def process(self, input_data: str) -> list[PerspectiveStrategy]:
        strategy_set = await self.completion_model.complete_structured(
            prompt=PERSPECTIVES_PROMPT.format(
                text=input_data,
                guidance=format_perspective_guidance(),
            ),
            schema=PerspectiveStrategySet,
            model=self.model,
            system_prompt=STRATEGY_SYSTEM_PROMPT,
        )

        # Stable emotional, literal, sarcastic order regardless of model output
        order = list(Perspective)
        strategies = sorted(strategy_set.strategies, key=lambda s: order.index(s.perspective))

        for strategy in strategies:
            self.logger.info(
                "strategy_generated",
                perspective=strategy.perspective.value,
                query=strategy.search_query,
            )
        return strategies
