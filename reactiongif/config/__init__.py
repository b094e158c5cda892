"""Application configuration."""

from reactiongif.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
