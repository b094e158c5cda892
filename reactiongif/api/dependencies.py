"""FastAPI dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from reactiongif.config.settings import Settings, get_settings
from reactiongif.pipelines.perspectives import PerspectiveGifPipeline
from reactiongif.pipelines.single import SingleGifPipeline
from reactiongif.services.giphy import GiphyClient
from reactiongif.services.openai_client import OpenAIClient
from reactiongif.services.payment import ThirdwebFacilitatorClient, X402PaymentSettler
from reactiongif.services.protocols import GifSearchProvider, PaymentSettler, TextCompletionModel


@lru_cache
def get_openai_client() -> OpenAIClient:
    """Get cached OpenAI client instance."""
    settings = get_settings()
    return OpenAIClient(
        api_key=settings.openai_api_key.get_secret_value(),
        default_model=settings.openai_selection_model,
        max_completion_tokens=settings.openai_max_completion_tokens,
        temperature=settings.openai_temperature,
    )


@lru_cache
def get_giphy_client() -> GiphyClient:
    """Get cached Giphy client instance."""
    settings = get_settings()
    return GiphyClient(
        api_key=settings.giphy_api_key.get_secret_value() if settings.giphy_api_key else None,
        base_url=settings.giphy_base_url,
        rating=settings.giphy_rating,
        lang=settings.giphy_lang,
        timeout=settings.http_timeout_seconds,
        max_attempts=settings.http_max_attempts,
    )


@lru_cache
def get_facilitator_client() -> ThirdwebFacilitatorClient:
    """Get cached facilitator client instance."""
    settings = get_settings()
    return ThirdwebFacilitatorClient(
        secret_key=settings.thirdweb_secret_key.get_secret_value(),
        base_url=settings.facilitator_base_url,
        timeout=settings.http_timeout_seconds,
        max_attempts=settings.http_max_attempts,
    )


@lru_cache
def get_payment_settler() -> X402PaymentSettler:
    """Get cached payment settler instance."""
    settings = get_settings()
    return X402PaymentSettler(
        facilitator=get_facilitator_client(),
        pay_to=settings.thirdweb_server_wallet_address,
        network=settings.payment_network,
        asset=settings.payment_asset_address,
        price=settings.payment_price,
        asset_decimals=settings.payment_asset_decimals,
        asset_name=settings.payment_asset_name,
        asset_version=settings.payment_asset_version,
        max_timeout_seconds=settings.payment_max_timeout_seconds,
    )


async def close_clients() -> None:
    """Close HTTP clients that were created during the app's lifetime."""
    for getter in (get_openai_client, get_giphy_client, get_facilitator_client):
        if getter.cache_info().currsize:
            await getter().close()


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
CompletionModelDep = Annotated[TextCompletionModel, Depends(get_openai_client)]
GifSearchDep = Annotated[GifSearchProvider, Depends(get_giphy_client)]
PaymentSettlerDep = Annotated[PaymentSettler, Depends(get_payment_settler)]


def get_generation_pipeline(
    settings: SettingsDep,
    completion_model: CompletionModelDep,
    gif_search: GifSearchDep,
) -> SingleGifPipeline | PerspectiveGifPipeline:
    """Build the pipeline for the configured generation mode."""
    if settings.generation_mode == "single":
        return SingleGifPipeline(settings, completion_model, gif_search)
    return PerspectiveGifPipeline(settings, completion_model, gif_search)


GenerationPipelineDep = Annotated[
    SingleGifPipeline | PerspectiveGifPipeline, Depends(get_generation_pipeline)
]
