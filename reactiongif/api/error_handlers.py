"""API error handlers.

Every error body is ``{"error": <message>}``. Upstream failures are
collapsed into one generic message; their details are only logged.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reactiongif.api.routes import GENERATION_FAILED
from reactiongif.utils.exceptions import (
    APIError,
    ConfigurationError,
    ExternalServiceError,
    GifGeneratorError,
    NoResultsError,
    ValidationError,
)
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register custom error handlers with the FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("validation_error", message=exc.message, field=exc.field)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NoResultsError)
    async def no_results_handler(request: Request, exc: NoResultsError) -> JSONResponse:
        logger.info("no_results", message=exc.message, details=exc.details)
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("configuration_error", message=exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        logger.error(
            "external_service_error",
            service=exc.service,
            upstream_status=exc.upstream_status,
            message=exc.message,
            details=exc.details,
        )
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        logger.error(
            "api_error",
            message=exc.message,
            status_code=exc.status_code,
            cause=str(exc.__cause__) if exc.__cause__ else None,
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(GifGeneratorError)
    async def gif_generator_error_handler(
        request: Request, exc: GifGeneratorError
    ) -> JSONResponse:
        logger.error("gif_generator_error", message=exc.message, details=exc.details)
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})
