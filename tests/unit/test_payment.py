"""Tests for x402 payment settlement."""

import base64
import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from reactiongif.models.payment import PaymentRequirements, SettlementResponse
from reactiongif.services.payment import (
    PAYMENT_RESPONSE_HEADER,
    ThirdwebFacilitatorClient,
    X402PaymentSettler,
    decode_payment_header,
    encode_header,
    price_to_atomic_units,
)
from reactiongif.utils.exceptions import ConfigurationError, ExternalServiceError

from tests.conftest import WALLET

RESOURCE = "https://gifs.example/api/generate"
NETWORK = "eip155:143"
ASSET = "0x754704Bc059F8C67012fEd69BC8A327a5aafb603"


def payment_header(network: str = NETWORK, scheme: str = "exact") -> str:
    return encode_header(
        {
            "x402Version": 1,
            "scheme": scheme,
            "network": network,
            "payload": {
                "signature": "0xsig",
                "authorization": {"from": "0xpayer", "to": WALLET, "value": "10000"},
            },
        }
    )


@pytest.fixture
def facilitator():
    """Create mock facilitator client."""
    client = MagicMock(spec=ThirdwebFacilitatorClient)
    client.is_configured = True
    client.settle = AsyncMock(
        return_value=SettlementResponse(
            success=True, transaction="0xtx", network=NETWORK, payer="0xpayer"
        )
    )
    return client


@pytest.fixture
def settler(facilitator):
    """Create settler instance."""
    return X402PaymentSettler(
        facilitator=facilitator,
        pay_to=WALLET,
        network=NETWORK,
        asset=ASSET,
        price="$0.01",
    )


class TestPriceConversion:
    """Tests for price_to_atomic_units."""

    @pytest.mark.parametrize(
        "price,decimals,expected",
        [("$0.01", 6, 10000), ("0.5", 6, 500000), ("$1,000", 2, 100000), ("$0.01", 18, 10**16)],
    )
    def test_converts(self, price, decimals, expected):
        """Test price conversion to atomic units."""
        assert price_to_atomic_units(price, decimals) == expected

    @pytest.mark.parametrize(
        "price", ["free", "$", "$0", "-1", "NaN", "Infinity", "$0.0000001"]
    )
    def test_rejects_invalid(self, price):
        """Test invalid prices are rejected."""
        with pytest.raises(ConfigurationError):
            price_to_atomic_units(price, 6)


class TestPaymentHeader:
    """Tests for header decoding."""

    def test_decodes(self):
        """Test header decoding."""
        payload = decode_payment_header(payment_header())

        assert payload.x402_version == 1
        assert payload.network == NETWORK
        assert payload.payload["signature"] == "0xsig"

    @pytest.mark.parametrize(
        "header",
        ["not base64!", base64.b64encode(b"not json").decode(), encode_header({"scheme": "exact"})],
    )
    def test_rejects_malformed(self, header):
        """Test malformed headers are rejected."""
        with pytest.raises(ValueError):
            decode_payment_header(header)


class TestX402PaymentSettler:
    """Tests for X402PaymentSettler."""

    def test_requirements(self, settler):
        """Test advertised payment requirements."""
        requirements = settler.build_requirements(RESOURCE).to_wire()

        assert requirements == {
            "scheme": "exact",
            "network": NETWORK,
            "maxAmountRequired": "10000",
            "resource": RESOURCE,
            "description": "Reaction GIF generation",
            "mimeType": "application/json",
            "payTo": WALLET,
            "maxTimeoutSeconds": 300,
            "asset": ASSET,
            "extra": {"name": "USD Coin", "version": "2"},
        }

    @pytest.mark.asyncio
    async def test_missing_header_requires_payment(self, settler, facilitator):
        """Test missing header requires payment."""
        result = await settler.settle(RESOURCE, "POST", None)

        assert result.status == 402
        assert not result.settled
        assert result.response_body["x402Version"] == 1
        assert result.response_body["error"] == "X-PAYMENT header is required"
        assert result.response_body["accepts"][0]["payTo"] == WALLET
        facilitator.settle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_header_requires_payment(self, settler, facilitator):
        """Test invalid header requires payment."""
        result = await settler.settle(RESOURCE, "POST", "garbage")

        assert result.status == 402
        assert result.response_body["error"] == "Invalid payment header"
        facilitator.settle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_network_requires_payment(self, settler, facilitator):
        """Test wrong network requires payment."""
        result = await settler.settle(RESOURCE, "POST", payment_header(network="eip155:8453"))

        assert result.status == 402
        assert NETWORK in result.response_body["error"]
        facilitator.settle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_scheme_requires_payment(self, settler):
        """Test wrong scheme requires payment."""
        result = await settler.settle(RESOURCE, "POST", payment_header(scheme="upto"))

        assert result.status == 402

    @pytest.mark.asyncio
    async def test_settles(self, settler, facilitator):
        """Test successful settlement receipt."""
        result = await settler.settle(RESOURCE, "POST", payment_header())

        assert result.settled
        receipt = json.loads(base64.b64decode(result.response_headers[PAYMENT_RESPONSE_HEADER]))
        assert receipt == {
            "success": True,
            "transaction": "0xtx",
            "network": NETWORK,
            "payer": "0xpayer",
        }

        payment, requirements = facilitator.settle.await_args.args
        assert payment.scheme == "exact"
        assert isinstance(requirements, PaymentRequirements)
        assert requirements.resource == RESOURCE

    @pytest.mark.asyncio
    async def test_rejected_settlement_requires_payment(self, settler, facilitator):
        """Test rejected settlement requires payment."""
        facilitator.settle.return_value = SettlementResponse(
            success=False, error_reason="insufficient_funds"
        )

        result = await settler.settle(RESOURCE, "POST", payment_header())

        assert result.status == 402
        assert result.response_body["error"] == "insufficient_funds"
        assert result.response_body["accepts"][0]["maxAmountRequired"] == "10000"

    @pytest.mark.asyncio
    async def test_facilitator_failure_propagates(self, settler, facilitator):
        """Test facilitator failure propagates."""
        facilitator.settle.side_effect = ExternalServiceError(
            "thirdweb_facilitator API error: 503", service="thirdweb_facilitator"
        )

        with pytest.raises(ExternalServiceError):
            await settler.settle(RESOURCE, "POST", payment_header())


class TestThirdwebFacilitatorClient:
    """Tests for the facilitator HTTP client."""

    @pytest.mark.asyncio
    async def test_posts_settle_request(self, settler):
        """Test settle request body and credentials."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["secret"] = request.headers.get("x-secret-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"success": True, "transaction": "0xtx", "network": NETWORK, "payer": "0xp"},
            )

        client = ThirdwebFacilitatorClient(secret_key="secret", base_url="https://facilitator.test")
        client._client = httpx.AsyncClient(
            base_url=client.base_url, transport=httpx.MockTransport(handler)
        )

        response = await client.settle(
            decode_payment_header(payment_header()), settler.build_requirements(RESOURCE)
        )

        assert response.success is True
        assert response.payer == "0xp"
        assert seen["url"] == "https://facilitator.test/settle"
        assert seen["secret"] == "secret"
        assert seen["body"]["x402Version"] == 1
        assert seen["body"]["paymentPayload"]["network"] == NETWORK
        assert seen["body"]["paymentRequirements"]["maxAmountRequired"] == "10000"
        await client.close()

    @pytest.mark.asyncio
    async def test_error_status_raises(self, settler):
        """Test error status raises."""
        client = ThirdwebFacilitatorClient(secret_key="secret", base_url="https://facilitator.test")
        client._client = httpx.AsyncClient(
            base_url=client.base_url,
            transport=httpx.MockTransport(lambda request: httpx.Response(401, text="bad key")),
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.settle(
                decode_payment_header(payment_header()), settler.build_requirements(RESOURCE)
            )

        assert exc_info.value.upstream_status == 401
        await client.close()


def test_sub_unit_price_is_rejected(facilitator):
    """Test a price too small for the asset cannot make the endpoint free."""
    with pytest.raises(ConfigurationError):
        X402PaymentSettler(
            facilitator=facilitator,
            pay_to=WALLET,
            network=NETWORK,
            asset=ASSET,
            price="$0.0000001",
        )
