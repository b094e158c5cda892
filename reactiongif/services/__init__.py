"""External service clients."""

from reactiongif.services.base_client import BaseHTTPClient
from reactiongif.services.giphy import GiphyClient
from reactiongif.services.openai_client import OpenAIClient
from reactiongif.services.payment import ThirdwebFacilitatorClient, X402PaymentSettler
from reactiongif.services.protocols import GifSearchProvider, PaymentSettler, TextCompletionModel

__all__ = [
    "BaseHTTPClient",
    "GiphyClient",
    "OpenAIClient",
    "ThirdwebFacilitatorClient",
    "X402PaymentSettler",
    "GifSearchProvider",
    "PaymentSettler",
    "TextCompletionModel",
]
