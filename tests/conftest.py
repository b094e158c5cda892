"""Pytest fixtures for testing."""

import os

# Set dummy secrets before any app imports so that Settings() validation
# succeeds during collection (reactiongif.main builds the app at import time).
os.environ.setdefault("OPENAI_API_KEY", "sk-test-openai-key")
os.environ.setdefault("THIRDWEB_SECRET_KEY", "test-thirdweb-secret")
os.environ.setdefault(
    "THIRDWEB_SERVER_WALLET_ADDRESS", "0x1111111111111111111111111111111111111111"
)
os.environ.setdefault("GIPHY_API_KEY", "test-giphy-key")

import pytest
from unittest.mock import AsyncMock, MagicMock

from reactiongif.config.settings import Settings
from reactiongif.models.gif import GifCandidate
from reactiongif.models.payment import SettlementResult
from reactiongif.models.strategy import (
    Perspective,
    PerspectiveStrategy,
    PerspectiveStrategySet,
    SearchStrategy,
    Selection,
)
from reactiongif.services.giphy import GiphyClient
from reactiongif.services.openai_client import OpenAIClient
from reactiongif.services.payment import X402PaymentSettler

WALLET = "0x1111111111111111111111111111111111111111"


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {
        "openai_api_key": "test-openai-key",
        "giphy_api_key": "test-giphy-key",
        "thirdweb_secret_key": "test-thirdweb-secret",
        "thirdweb_server_wallet_address": WALLET,
        "debug": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def sample_candidate(index: int = 0, alt_text: str | None = "a person reacting") -> GifCandidate:
    """Create sample GIF candidate."""
    return GifCandidate(
        id=f"gif{index}",
        title=f"Reaction GIF {index}",
        alt_text=alt_text,
        media_url=f"https://media.giphy.com/media/gif{index}/giphy.gif",
    )


@pytest.fixture
def mock_settings():
    """Create settings for the multi-perspective variant."""
    return make_settings()


@pytest.fixture
def single_settings():
    """Create settings for the single-GIF variant."""
    return make_settings(generation_mode="single")


@pytest.fixture
def sample_strategy():
    """Create sample single-variant strategy."""
    return SearchStrategy(
        keywords=["relief", "celebration"],
        topic="coding",
        reasoning="Compiling code is a relief",
    )


@pytest.fixture
def sample_perspective_strategies():
    """Create one strategy per perspective."""
    return PerspectiveStrategySet(
        strategies=[
            PerspectiveStrategy(
                perspective=Perspective.EMOTIONAL,
                keywords=["relief", "joy"],
                topic=None,
                reasoning="Feels like relief",
            ),
            PerspectiveStrategy(
                perspective=Perspective.LITERAL,
                keywords=["typing", "computer"],
                topic="coding",
                reasoning="Someone at a keyboard",
            ),
            PerspectiveStrategy(
                perspective=Perspective.SARCASTIC,
                keywords=["slow clap"],
                topic=None,
                reasoning="Mock applause",
            ),
        ]
    )


@pytest.fixture
def sample_selection():
    """Create sample selection of the second candidate."""
    return Selection(selected_index=1, reasoning="Best matches the mood")


@pytest.fixture
def sample_candidates():
    """Create a list of sample candidates."""
    return [sample_candidate(i) for i in range(3)]


@pytest.fixture
def mock_openai_client(sample_strategy, sample_perspective_strategies, sample_selection):
    """Create mock OpenAI client answering by requested schema."""
    responses = {
        SearchStrategy: sample_strategy,
        PerspectiveStrategySet: sample_perspective_strategies,
        Selection: sample_selection,
    }

    async def complete_structured(prompt, schema, model=None, system_prompt=None):
        return responses[schema]

    client = MagicMock(spec=OpenAIClient)
    client.is_configured = True
    client.complete_structured = AsyncMock(side_effect=complete_structured)
    return client


@pytest.fixture
def mock_giphy_client(sample_candidates):
    """Create mock Giphy client."""
    client = MagicMock(spec=GiphyClient)
    client.is_configured = True
    client.search = AsyncMock(return_value=sample_candidates)
    return client


@pytest.fixture
def mock_payment_settler():
    """Create mock payment settler that always settles."""
    settler = MagicMock(spec=X402PaymentSettler)
    settler.is_configured = True
    settler.settle = AsyncMock(
        return_value=SettlementResult(
            status=200,
            response_headers={"X-PAYMENT-RESPONSE": "c2V0dGxlZA=="},
        )
    )
    return settler
