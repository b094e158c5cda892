"""Utility modules."""

from reactiongif.utils.exceptions import (
    APIError,
    ConfigurationError,
    ExternalServiceError,
    GifGeneratorError,
    NoResultsError,
    ValidationError,
)
from reactiongif.utils.logging import get_logger, setup_logging

__all__ = [
    "GifGeneratorError",
    "ConfigurationError",
    "ExternalServiceError",
    "ValidationError",
    "NoResultsError",
    "APIError",
    "get_logger",
    "setup_logging",
]
