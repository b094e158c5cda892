"""Pipeline orchestration module."""

from reactiongif.pipelines.perspectives import PerspectiveGifPipeline
from reactiongif.pipelines.single import SingleGifPipeline

__all__ = ["SingleGifPipeline", "PerspectiveGifPipeline"]
