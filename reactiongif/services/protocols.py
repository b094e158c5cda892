"""Interfaces of the external collaborators the pipelines depend on.

The concrete clients satisfy these structurally; tests substitute fakes.
"""

from typing import Protocol, TypeVar

from pydantic import BaseModel

from reactiongif.models.gif import GifCandidate
from reactiongif.models.payment import SettlementResult

ModelT = TypeVar("ModelT", bound=BaseModel)


class PaymentSettler(Protocol):
    """Settles the payment attached to a request."""

    @property
    def is_configured(self) -> bool: ...

    async def settle(
        self, resource_url: str, method: str, payment_data: str | None
    ) -> SettlementResult: ...


class TextCompletionModel(Protocol):
    """Produces schema-validated completions."""

    @property
    def is_configured(self) -> bool: ...

    async def complete_structured(
        self,
        prompt: str,
        schema: type[ModelT],
        model: str | None = None,
        system_prompt: str | None = None,
    ) -> ModelT: ...


class GifSearchProvider(Protocol):
    """Searches a GIF catalog."""

    @property
    def is_configured(self) -> bool: ...

    async def search(self, query: str, limit: int = 10) -> list[GifCandidate]: ...
