"""Shared async JSON-over-HTTP client for upstream APIs."""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from reactiongif import __version__
from reactiongif.utils.exceptions import ExternalServiceError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

# Upstream bodies end up in logs; keep them short
BODY_PREVIEW_CHARS = 500


class BaseHTTPClient:
    """JSON API client on top of a lazily created ``httpx.AsyncClient``.

    Every failure (transport, error status, undecodable body) surfaces as
    ``ExternalServiceError`` tagged with ``service_name``. A request is sent
    once unless ``max_attempts`` is raised, in which case only transport
    failures are retried, with exponential backoff.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_attempts: int = 1,
        service_name: str = "upstream",
    ):
        """Set up the client; no connection is opened until the first request.

        Args:
            base_url: Prefix for every endpoint
            timeout: Per-request timeout in seconds
            max_attempts: Total attempts per request, 1 disables retries
            service_name: Name used in logs and errors
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.service_name = service_name

        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _get_headers(self) -> dict[str, str]:
        """Headers sent with every request. Subclasses add credentials here."""
        return {
            "Accept": "application/json",
            "User-Agent": f"ReactionGifGenerator/{__version__}",
        }

    def _error(self, message: str, **kwargs: Any) -> ExternalServiceError:
        return ExternalServiceError(message=message, service=self.service_name, **kwargs)

    async def _send(self, request: httpx.Request) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self.client.send(request)

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return its decoded JSON body.

        Raises:
            ExternalServiceError: On transport failure, error status or bad JSON
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request = self.client.build_request(
            method, url, params=params, json=json_data, headers=self._get_headers()
        )

        try:
            response = await self._send(request)
        except httpx.TransportError as e:
            kind = "timeout" if isinstance(e, httpx.TimeoutException) else "connection"
            logger.error(
                "upstream_unreachable",
                service=self.service_name,
                kind=kind,
                path=request.url.path,
                error=str(e),
            )
            label = "Request timeout to" if kind == "timeout" else "Connection error to"
            raise self._error(
                f"{label} {self.service_name}",
                details={"path": request.url.path, "error": str(e)},
            ) from e

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        body_preview = response.text[:BODY_PREVIEW_CHARS]

        if response.is_error:
            logger.error(
                "upstream_error_status",
                service=self.service_name,
                status_code=response.status_code,
                body=body_preview,
            )
            raise self._error(
                f"{self.service_name} API error: {response.status_code}",
                status_code=response.status_code,
                details={"response": body_preview},
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("upstream_invalid_json", service=self.service_name, body=body_preview)
            raise self._error(
                f"Invalid JSON response from {self.service_name}",
                details={"error": str(e), "response": body_preview},
            ) from e

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._make_request("GET", endpoint, params=params)

    async def post(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._make_request("POST", endpoint, params=params, json_data=json_data)
