"""Multi-perspective reaction GIF pipeline."""

import asyncio

from reactiongif.agents.gif_fetcher import FetchInput, GifFetcherAgent, StrategyCandidates
from reactiongif.agents.prompts import PERSPECTIVE_GUIDANCE
from reactiongif.agents.selector import GifSelectorAgent, SelectedGif, SelectionInput
from reactiongif.agents.strategy_generator import PerspectiveStrategyAgent
from reactiongif.config.settings import Settings
from reactiongif.models.gif import PerspectiveGifResponse, PerspectiveGifResult
from reactiongif.models.strategy import PerspectiveStrategy
from reactiongif.services.protocols import GifSearchProvider, TextCompletionModel
from reactiongif.utils.exceptions import NoResultsError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

NO_GIFS_FOUND = "No GIFs found"


class PerspectiveGifPipeline:
    """Finds one reaction GIF per perspective (emotional, literal, sarcastic).

    Searches and selections each run concurrently across strategies. A
    strategy whose search fails, finds nothing, or whose selection fails is
    dropped; the others are still returned.
    """

    def __init__(
        self,
        settings: Settings,
        completion_model: TextCompletionModel,
        gif_search: GifSearchProvider,
    ):
        self.settings = settings
        self.strategy_generator = PerspectiveStrategyAgent(
            completion_model, model=settings.openai_strategy_model
        )
        self.gif_fetcher = GifFetcherAgent(gif_search)
        self.selector = GifSelectorAgent(completion_model, model=settings.openai_selection_model)

    async def execute(self, text: str) -> PerspectiveGifResponse:
        """Run the pipeline.

        Raises:
            ConfigurationError: If Giphy is not configured
            NoResultsError: If no strategy produced a GIF
        """
        strategies = await self.strategy_generator.execute(text)

        outcomes = await self.gif_fetcher.execute(
            FetchInput(strategies=strategies, limit=self.settings.perspective_search_limit)
        )
        searchable = [outcome for outcome in outcomes if outcome.candidates]

        selections = await asyncio.gather(
            *(self._select(text, outcome) for outcome in searchable),
            return_exceptions=True,
        )

        gifs = []
        for outcome, selected in zip(searchable, selections):
            strategy: PerspectiveStrategy = outcome.strategy  # type: ignore[assignment]

            if isinstance(selected, Exception):
                logger.warning(
                    "selection_failed",
                    perspective=strategy.perspective.value,
                    error=str(selected),
                )
                continue

            gifs.append(
                PerspectiveGifResult(
                    url=selected.candidate.media_url,
                    keywords=strategy.keywords,
                    topic=strategy.topic,
                    reasoning=selected.reasoning,
                    title=selected.candidate.title,
                    perspective=strategy.perspective,
                )
            )

        logger.info(
            "perspective_gifs_selected",
            strategies=len(strategies),
            returned=len(gifs),
            dropped=len(strategies) - len(gifs),
        )

        if not gifs:
            raise NoResultsError(NO_GIFS_FOUND)

        return PerspectiveGifResponse(gifs=gifs)

    async def _select(self, text: str, outcome: StrategyCandidates) -> SelectedGif:
        strategy: PerspectiveStrategy = outcome.strategy  # type: ignore[assignment]
        return await self.selector.execute(
            SelectionInput(
                text=text,
                candidates=outcome.candidates,
                guidance=PERSPECTIVE_GUIDANCE[strategy.perspective],
            )
        )
