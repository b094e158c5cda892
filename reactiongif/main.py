"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from reactiongif import __version__
from reactiongif.api.dependencies import close_clients
from reactiongif.api.error_handlers import register_error_handlers
from reactiongif.api.middleware import setup_middleware
from reactiongif.api.routes import router
from reactiongif.config.settings import get_settings
from reactiongif.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        version=__version__,
        generation_mode=settings.generation_mode,
        network=settings.payment_network,
        price=settings.payment_price,
        giphy_configured=settings.giphy_configured,
    )

    yield

    await close_clients()
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Reaction GIF Generator",
        description=(
            "Describe any situation and get the perfect reaction GIF, "
            "paid per request over x402 and curated by AI from Giphy."
        ),
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    setup_middleware(app)
    register_error_handlers(app)
    app.include_router(router)

    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "reactiongif.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
