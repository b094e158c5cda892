"""x402 payment settlement through a hosted facilitator.

The facilitator does the actual verification and on-chain transfer. This
module only builds the payment requirements for a resource, decodes the
client's ``X-PAYMENT`` header and turns the facilitator's answer into
either "proceed" or a 402 response to relay.
"""

import base64
import json
from decimal import Decimal, InvalidOperation
from typing import Any

from reactiongif.models.payment import (
    X402_VERSION,
    PaymentPayload,
    PaymentRequirements,
    SettlementResponse,
    SettlementResult,
)
from reactiongif.services.base_client import BaseHTTPClient
from reactiongif.utils.exceptions import ConfigurationError
from reactiongif.utils.logging import get_logger

logger = get_logger(__name__)

PAYMENT_HEADER = "X-PAYMENT"
PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"


def price_to_atomic_units(price: str, decimals: int) -> int:
    """Convert a USD price such as ``"$0.01"`` to the asset's smallest unit.

    Raises:
        ConfigurationError: If the price is not a positive amount
    """
    try:
        amount = Decimal(price.strip().lstrip("$").replace(",", ""))
    except InvalidOperation as e:
        raise ConfigurationError(f"Invalid payment price: {price!r}") from e

    if not amount.is_finite() or amount <= 0:
        raise ConfigurationError(f"Payment price must be positive: {price!r}")

    units = int(amount.scaleb(decimals).to_integral_value())
    if units <= 0:
        raise ConfigurationError(
            f"Payment price {price!r} is below the smallest unit at {decimals} decimals"
        )
    return units


def encode_header(data: dict[str, Any]) -> str:
    """Base64-encode a JSON object for an x402 header."""
    return base64.b64encode(json.dumps(data, separators=(",", ":")).encode()).decode()


def decode_payment_header(header: str) -> PaymentPayload:
    """Decode an ``X-PAYMENT`` header value.

    Raises:
        ValueError: If the header is not base64 JSON of a payment payload
    """
    try:
        data = json.loads(base64.b64decode(header, validate=True))
        return PaymentPayload.model_validate(data)
    except ValueError as e:
        # binascii, JSON and pydantic validation errors are all ValueErrors
        raise ValueError(f"Malformed payment header: {e}") from e


class ThirdwebFacilitatorClient(BaseHTTPClient):
    """Client for the thirdweb x402 facilitator."""

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.thirdweb.com/v1/payments/x402",
        timeout: float = 30.0,
        max_attempts: int = 1,
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_attempts=max_attempts,
            service_name="thirdweb_facilitator",
        )
        self._secret_key = secret_key

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def _get_headers(self) -> dict[str, str]:
        headers = super()._get_headers()
        headers["x-secret-key"] = self._secret_key
        return headers

    async def settle(
        self,
        payment: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettlementResponse:
        """Ask the facilitator to verify and settle a payment.

        Raises:
            ExternalServiceError: If the facilitator cannot be reached or errors
        """
        response = await self.post(
            "/settle",
            json_data={
                "x402Version": payment.x402_version,
                "paymentPayload": payment.to_wire(),
                "paymentRequirements": requirements.to_wire(),
            },
        )
        return SettlementResponse.model_validate(response)


class X402PaymentSettler:
    """Settles a fixed-price payment for a resource before it is served."""

    def __init__(
        self,
        facilitator: ThirdwebFacilitatorClient,
        pay_to: str,
        network: str,
        asset: str,
        price: str = "$0.01",
        asset_decimals: int = 6,
        asset_name: str = "USD Coin",
        asset_version: str = "2",
        max_timeout_seconds: int = 300,
        description: str = "Reaction GIF generation",
    ):
        """Initialize the settler.

        Args:
            facilitator: Facilitator client performing settlement
            pay_to: Wallet address receiving the payment
            network: x402 network identifier
            asset: Token contract address
            price: USD price per request
            asset_decimals: Token decimals used to convert the price
            asset_name: EIP-712 domain name of the token
            asset_version: EIP-712 domain version of the token
            max_timeout_seconds: How long a signed authorization stays valid
            description: Human-readable resource description
        """
        self.facilitator = facilitator
        self.pay_to = pay_to
        self.network = network
        self.asset = asset
        self.price = price
        self.amount = price_to_atomic_units(price, asset_decimals)
        self.asset_name = asset_name
        self.asset_version = asset_version
        self.max_timeout_seconds = max_timeout_seconds
        self.description = description

    @property
    def is_configured(self) -> bool:
        return bool(self.pay_to) and self.facilitator.is_configured

    def build_requirements(self, resource_url: str) -> PaymentRequirements:
        """Payment requirements advertised for ``resource_url``."""
        return PaymentRequirements(
            network=self.network,
            max_amount_required=str(self.amount),
            resource=resource_url,
            description=self.description,
            pay_to=self.pay_to,
            max_timeout_seconds=self.max_timeout_seconds,
            asset=self.asset,
            extra={"name": self.asset_name, "version": self.asset_version},
        )

    def _payment_required(self, requirements: PaymentRequirements, error: str) -> SettlementResult:
        return SettlementResult(
            status=402,
            response_body={
                "x402Version": X402_VERSION,
                "error": error,
                "accepts": [requirements.to_wire()],
            },
            response_headers={"Content-Type": "application/json"},
        )

    async def settle(
        self,
        resource_url: str,
        method: str,
        payment_data: str | None,
    ) -> SettlementResult:
        """Verify and settle the payment proof sent with a request.

        Args:
            resource_url: Absolute URL of the guarded resource
            method: HTTP method of the guarded request
            payment_data: Raw ``X-PAYMENT`` header value, if any

        Returns:
            Status 200 with the settlement receipt header, or a 402 to relay

        Raises:
            ExternalServiceError: If the facilitator call fails
        """
        requirements = self.build_requirements(resource_url)

        if not payment_data:
            logger.info("payment_missing", resource=resource_url, method=method)
            return self._payment_required(requirements, f"{PAYMENT_HEADER} header is required")

        try:
            payment = decode_payment_header(payment_data)
        except ValueError as e:
            logger.warning("payment_header_invalid", error=str(e))
            return self._payment_required(requirements, "Invalid payment header")

        if payment.scheme != requirements.scheme:
            return self._payment_required(
                requirements, f"Unsupported payment scheme: {payment.scheme}"
            )
        if payment.network != requirements.network:
            return self._payment_required(
                requirements, f"Payment network must be {requirements.network}"
            )

        settlement = await self.facilitator.settle(payment, requirements)

        if not settlement.success:
            logger.warning(
                "payment_settlement_rejected",
                reason=settlement.error_reason,
                payer=settlement.payer,
            )
            return self._payment_required(
                requirements, settlement.error_reason or "Payment settlement failed"
            )

        logger.info(
            "payment_settled",
            payer=settlement.payer,
            transaction=settlement.transaction,
            amount=requirements.max_amount_required,
        )
        return SettlementResult(
            status=200,
            response_headers={PAYMENT_RESPONSE_HEADER: encode_header(settlement.to_wire())},
        )
