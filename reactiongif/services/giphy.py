"""Giphy API client."""

from typing import Any

from reactiongif.models.gif import GifCandidate
from reactiongif.services.base_client import BaseHTTPClient
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)


class GiphyClient(BaseHTTPClient):
    """Client for the Giphy GIF search API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.giphy.com/v1/gifs",
        rating: str = "pg-13",
        lang: str = "en",
        timeout: float = 30.0,
        max_attempts: int = 1,
    ):
        """Initialize Giphy client.

        Args:
            api_key: Giphy API key, may be unset
            base_url: API base URL
            rating: Content rating filter
            lang: Language hint for the search
            timeout: Request timeout
            max_attempts: Attempts per request
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_attempts=max_attempts,
            service_name="giphy",
        )
        self.api_key = api_key
        self.rating = rating
        self.lang = lang

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    async def search_gifs(self, query: str, limit: int = 10) -> dict[str, Any]:
        """Run a raw search.

        Args:
            query: Search query
            limit: Maximum results

        Returns:
            Raw API response
        """
        params: dict[str, Any] = {
            "api_key": self.api_key,
            "q": query,
            "limit": limit,
            "rating": self.rating,
            "lang": self.lang,
        }
        return await self.get("/search", params=params)

    async def search(self, query: str, limit: int = 10) -> list[GifCandidate]:
        """Search for GIFs and return parsed candidates.

        Raises:
            ExternalServiceError: If the request fails
        """
        response = await self.search_gifs(query, limit=limit)
        candidates = self._parse_gifs(response.get("data") or [])
        logger.info("giphy_search_completed", query=query, found=len(candidates))
        return candidates

    def _parse_gifs(self, gifs: list[dict[str, Any]]) -> list[GifCandidate]:
        """Parse Giphy records into candidates, skipping ones without an original URL."""
        candidates = []
        for gif in gifs:
            original = (gif.get("images") or {}).get("original")
            url = original.get("url") if isinstance(original, dict) else None
            if not url:
                logger.debug("giphy_gif_without_url", gif_id=gif.get("id"))
                continue

            candidates.append(
                GifCandidate(
                    id=str(gif.get("id", "")),
                    title=gif.get("title") or "",
                    alt_text=gif.get("alt_text") or None,
                    media_url=url,
                )
            )
        return candidates
