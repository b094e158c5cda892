"""Request logging and CORS middleware."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from reactiongif.services.payment import PAYMENT_HEADER, PAYMENT_RESPONSE_HEADER
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its id and logs the outcome.

    An incoming ``X-Request-ID`` is reused so ids can be correlated with a
    proxy in front of the app.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        logger.info(
            "request_started",
            client=request.client.host if request.client else None,
            paid=PAYMENT_HEADER in request.headers,
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_crashed", duration_ms=_elapsed_ms(started))
            raise

        duration_ms = _elapsed_ms(started)
        logger.info("request_finished", status=response.status_code, duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install CORS and request logging; logging is outermost."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        # Wallet-aware clients read the settlement receipt
        expose_headers=[PAYMENT_RESPONSE_HEADER, REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
