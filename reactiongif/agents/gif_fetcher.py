"""GIF fetcher agent for concurrent per-strategy searches."""

import asyncio
from dataclasses import dataclass, field

from reactiongif.agents.base import BaseAgent
from reactiongif.models.gif import GifCandidate
from reactiongif.models.strategy import SearchStrategy
from reactiongif.services.protocols import GifSearchProvider
from reactiongif.utils.exceptions import ConfigurationError

GIPHY_NOT_CONFIGURED = "Giphy API key not configured"


@dataclass
class FetchInput:
    """Input for GIF fetching."""

    strategies: list[SearchStrategy]
    limit: int = 10


@dataclass
class StrategyCandidates:
    """Search outcome for one strategy."""

    strategy: SearchStrategy
    candidates: list[GifCandidate] = field(default_factory=list)
    error: Exception | None = None


class GifFetcherAgent(BaseAgent[FetchInput, list[StrategyCandidates]]):
    """Agent for searching GIFs for several strategies at once.

    Searches run concurrently and the agent waits for all of them. A failed
    search is recorded on its outcome instead of failing its siblings; it is
    up to the caller to decide whether that failure is fatal.
    """

    name = "gif_fetcher"

    def __init__(self, search_provider: GifSearchProvider):
        super().__init__()
        self.search_provider = search_provider

    async def process(self, input_data: FetchInput) -> list[StrategyCandidates]:
        """Search once per strategy.

        Raises:
            ConfigurationError: If the provider has no API key; no search is attempted
        """
        if not self.search_provider.is_configured:
            raise ConfigurationError(GIPHY_NOT_CONFIGURED)

        results = await asyncio.gather(
            *(
                self.search_provider.search(strategy.search_query, limit=input_data.limit)
                for strategy in input_data.strategies
            ),
            return_exceptions=True,
        )

        outcomes = []
        for strategy, candidates_or_error in zip(input_data.strategies, results):
            if isinstance(candidates_or_error, Exception):
                self.logger.warning(
                    "fetch_error",
                    query=strategy.search_query,
                    error=str(candidates_or_error),
                )
                outcomes.append(StrategyCandidates(strategy=strategy, error=candidates_or_error))
            else:
                outcomes.append(StrategyCandidates(strategy=strategy, candidates=candidates_or_error))

        return outcomes
