"""E2E tests for invalid caller input and malformed gateway traffic."""

import json

import pytest
import requests

from src.utils.crypto import generate_digest, generate_signature
from src.utils.factories import PaymentRequestFactory


pytestmark = pytest.mark.e2e


class TestInvalidInput:
    """Invalid input is rejected before anything is sent."""

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"customer_email": "not-an-email"}, "customer_email"),
            ({"amount": 0}, "amount"),
            ({"order_id": ""}, "order_id"),
            ({"return_url": "not a url"}, "return_url"),
            ({"expired_time": -10}, "expired_time"),
            ({"amount": float("inf")}, "amount"),
        ],
    )
    def test_invalid_field_never_reaches_gateway(self, gateway_client, sandbox_gateway, overrides, field):
        result = gateway_client.create_payment(PaymentRequestFactory.create(**overrides))

        assert sandbox_gateway.get_request_count() == 0
        assert result.success is False
        assert result.message == "Internal server error"
        assert field in {err["loc"][0] for err in result.details}

    def test_non_mapping_input_is_generic_failure(self, gateway_client, sandbox_gateway):
        result = gateway_client.create_payment("not a payment")

        assert sandbox_gateway.get_request_count() == 0
        assert result.success is False
        assert result.message == "Internal server error"


class TestMalformedGatewayTraffic:
    """The sandbox gateway answers malformed requests like the real one."""

    def test_signed_invalid_json_returns_400(self, sandbox_gateway, client_id, secret_key):
        body = b"this is not json {{{"
        headers = {
            "Content-Type": "application/json",
            "Client-Id": client_id,
            "Request-Id": "req-bad-json",
            "Request-Timestamp": "2024-05-01T10:00:00Z",
            "Signature": generate_signature(
                client_id, "req-bad-json", "/checkout/v1/payment",
                generate_digest(body), secret_key, "2024-05-01T10:00:00Z",
            ),
        }

        resp = requests.post(sandbox_gateway.url, data=body, headers=headers, timeout=5)

        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Invalid JSON"

    def test_unknown_path_returns_404(self, sandbox_gateway):
        resp = requests.post(
            f"{sandbox_gateway.base_url}/checkout/v9/payment",
            data=json.dumps({}),
            timeout=5,
        )

        assert resp.status_code == 404
