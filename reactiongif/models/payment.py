"""x402 payment models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

X402_VERSION = 1


class X402Model(BaseModel):
    """Base for x402 wire models, which use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys as the facilitator and clients expect."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaymentRequirements(X402Model):
    """What the resource costs and where the money goes."""

    scheme: str = "exact"
    network: str
    max_amount_required: str = Field(..., description="Price in the asset's atomic units")
    resource: str
    description: str = ""
    mime_type: str = "application/json"
    pay_to: str
    max_timeout_seconds: int = 300
    asset: str
    extra: dict[str, Any] | None = Field(
        default=None, description="EIP-712 domain name/version of the asset"
    )


class PaymentPayload(X402Model):
    """Decoded contents of the X-PAYMENT header."""

    x402_version: int = Field(..., alias="x402Version")
    scheme: str
    network: str
    payload: dict[str, Any]


class SettlementResponse(X402Model):
    """Facilitator answer to a settle request."""

    success: bool
    error_reason: str | None = None
    transaction: str | None = None
    network: str | None = None
    payer: str | None = None


class SettlementResult(BaseModel):
    """Outcome of settling one request's payment.

    ``status`` 200 means the caller may proceed; any other status must be
    relayed to the client with ``response_body`` and ``response_headers``
    unmodified.
    """

    status: int
    response_body: dict[str, Any] = Field(default_factory=dict)
    response_headers: dict[str, str] = Field(default_factory=dict)

    @property
    def settled(self) -> bool:
        return self.status == 200
