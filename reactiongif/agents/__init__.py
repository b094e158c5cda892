"""AI agent system for reaction GIF generation."""

from reactiongif.agents.base import BaseAgent
from reactiongif.agents.gif_fetcher import GifFetcherAgent
from reactiongif.agents.selector import GifSelectorAgent
from reactiongif.agents.strategy_generator import KeywordStrategyAgent, PerspectiveStrategyAgent

__all__ = [
    "BaseAgent",
    "KeywordStrategyAgent",
    "PerspectiveStrategyAgent",
    "GifFetcherAgent",
    "GifSelectorAgent",
]
