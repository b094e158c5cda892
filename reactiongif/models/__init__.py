"""Pydantic models for requests, responses, and data structures."""

from reactiongif.models.gif import (
    GifCandidate,
    GifResult,
    PerspectiveGifResponse,
    PerspectiveGifResult,
)
from reactiongif.models.payment import (
    PaymentPayload,
    PaymentRequirements,
    SettlementResponse,
    SettlementResult,
)
from reactiongif.models.requests import GenerateRequest
from reactiongif.models.responses import ClientConfigResponse, ErrorResponse, HealthResponse
from reactiongif.models.strategy import (
    Perspective,
    PerspectiveStrategy,
    PerspectiveStrategySet,
    SearchStrategy,
    Selection,
)

__all__ = [
    "GifCandidate",
    "GifResult",
    "PerspectiveGifResult",
    "PerspectiveGifResponse",
    "PaymentPayload",
    "PaymentRequirements",
    "SettlementResponse",
    "SettlementResult",
    "GenerateRequest",
    "ClientConfigResponse",
    "ErrorResponse",
    "HealthResponse",
    "Perspective",
    "PerspectiveStrategy",
    "PerspectiveStrategySet",
    "SearchStrategy",
    "Selection",
]
