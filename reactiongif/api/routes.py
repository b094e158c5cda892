"""API route definitions."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from reactiongif import __version__
from reactiongif.api.dependencies import (
    CompletionModelDep,
    GenerationPipelineDep,
    GifSearchDep,
    PaymentSettlerDep,
    SettingsDep,
)
from reactiongif.models.gif import GifResult, PerspectiveGifResponse
from reactiongif.models.requests import GenerateRequest
from reactiongif.models.responses import ClientConfigResponse, ErrorResponse, HealthResponse
from reactiongif.services.payment import PAYMENT_HEADER
from reactiongif.utils.exceptions import APIError, GifGeneratorError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

GENERATION_FAILED = "Failed to generate GIF recommendation"

router = APIRouter()


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Redirect root to web UI."""
    return RedirectResponse(url="/static/index.html")


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    completion_model: CompletionModelDep,
    gif_search: GifSearchDep,
    settler: PaymentSettlerDep,
) -> HealthResponse:
    """Report which upstream services are configured. Makes no network calls."""
    services = {
        "openai": completion_model.is_configured,
        "giphy": gif_search.is_configured,
        "payment": settler.is_configured,
    }
    return HealthResponse(
        status="healthy" if all(services.values()) else "degraded",
        version=__version__,
        services=services,
    )


@router.get("/api/config", response_model=ClientConfigResponse, tags=["Config"])
async def client_config(settings: SettingsDep) -> ClientConfigResponse:
    """Public settings for the browser UI."""
    return ClientConfigResponse(
        price=settings.payment_price,
        network=settings.payment_network,
        asset=settings.payment_asset_address,
        generation_mode=settings.generation_mode,
        client_id=settings.thirdweb_client_id,
    )


@router.post(
    "/api/generate",
    name="generate_gif",
    response_model=GifResult | PerspectiveGifResponse,
    responses={
        400: {"model": ErrorResponse},
        402: {"description": "Payment required; body and headers come from the facilitator"},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Generate"],
)
async def generate_gif(
    request: Request,
    settler: PaymentSettlerDep,
    pipeline: GenerationPipelineDep,
) -> JSONResponse:
    """Pay for and generate reaction GIF recommendations for a piece of text.

    Without a valid ``X-PAYMENT`` header the facilitator's 402 response is
    returned unchanged. The response is a single GIF or ``{"gifs": [...]}``
    depending on the configured generation mode.
    """
    try:
        body = await request.json()
    except (ValueError, RecursionError):
        # Undecodable and pathologically nested bodies have no usable text
        body = None
    generate_request = GenerateRequest.from_body(body)

    try:
        settlement = await settler.settle(
            resource_url=str(request.url_for("generate_gif")),
            method=request.method,
            payment_data=request.headers.get(PAYMENT_HEADER),
        )
        if not settlement.settled:
            return JSONResponse(
                settlement.response_body,
                status_code=settlement.status,
                headers=settlement.response_headers,
            )

        logger.info("generate_request", text=generate_request.text[:50])
        result = await pipeline.execute(generate_request.text)

    except GifGeneratorError:
        raise
    except Exception as e:
        logger.exception("gif_generation_failed", error=str(e))
        raise APIError(GENERATION_FAILED, status_code=500) from e

    return JSONResponse(result.model_dump(mode="json"), headers=settlement.response_headers)
