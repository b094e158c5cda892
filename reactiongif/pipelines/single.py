"""Single reaction GIF pipeline."""

from reactiongif.agents.gif_fetcher import FetchInput, GifFetcherAgent
from reactiongif.agents.selector import GifSelectorAgent, SelectionInput
from reactiongif.agents.strategy_generator import KeywordStrategyAgent
from reactiongif.config.settings import Settings
from reactiongif.models.gif import GifResult
from reactiongif.services.protocols import GifSearchProvider, TextCompletionModel
from reactiongif.utils.exceptions import APIError, NoResultsError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

GIPHY_FETCH_FAILED = "Failed to fetch from Giphy"
NO_GIF_FOUND = "No GIF found"


class SingleGifPipeline:
    """Finds one reaction GIF for a piece of text.

    Steps:
    1. Keyword strategy generation
    2. One Giphy search
    3. Selection of the best candidate
    """

    def __init__(
        self,
        settings: Settings,
        completion_model: TextCompletionModel,
        gif_search: GifSearchProvider,
    ):
        self.settings = settings
        self.strategy_generator = KeywordStrategyAgent(
            completion_model, model=settings.openai_strategy_model
        )
        self.gif_fetcher = GifFetcherAgent(gif_search)
        self.selector = GifSelectorAgent(completion_model, model=settings.openai_selection_model)

    async def execute(self, text: str) -> GifResult:
        """Run the pipeline.

        Raises:
            ConfigurationError: If Giphy is not configured
            APIError: If the Giphy search fails
            NoResultsError: If the search returns nothing
        """
        strategy = await self.strategy_generator.execute(text)

        [outcome] = await self.gif_fetcher.execute(
            FetchInput(strategies=[strategy], limit=self.settings.single_search_limit)
        )
        if outcome.error is not None:
            raise APIError(GIPHY_FETCH_FAILED, status_code=500) from outcome.error
        if not outcome.candidates:
            raise NoResultsError(NO_GIF_FOUND, details={"query": strategy.search_query})

        selected = await self.selector.execute(
            SelectionInput(text=text, candidates=outcome.candidates)
        )

        logger.info("gif_selected", title=selected.candidate.title, query=strategy.search_query)

        return GifResult(
            url=selected.candidate.media_url,
            keywords=strategy.keywords,
            topic=strategy.topic,
            reasoning=selected.reasoning,
            title=selected.candidate.title,
        )
