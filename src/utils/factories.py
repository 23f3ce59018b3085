import json
import uuid
from datetime import datetime, timezone

import requests

from src.doku_client.envelope import ResponseEnvelope
from src.utils.crypto import generate_digest, generate_signature


class PaymentRequestFactory:
    """Factory for raw payment-request input with sensible defaults."""

    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "order_id": f"INV-{uuid.uuid4().hex[:12].upper()}",
            "amount": 10000,
            "customer_name": "Budi Santoso",
            "customer_email": "budi@example.com",
            "customer_phone": "08123456789",
            "return_url": "https://merchant.example.com/checkout/return",
        }
        defaults.update(overrides)
        return defaults


class GatewayResponseFactory:
    """Factory for gateway response bodies in either envelope."""

    @staticmethod
    def checkout_payload(
        invoice_number: str = "INV-123",
        amount: int | float = 10000,
        envelope: ResponseEnvelope = ResponseEnvelope.NESTED,
        payment_url: str | None = None,
    ) -> dict:
        token = uuid.uuid4().hex
        checkout = {
            "order": {
                "invoice_number": invoice_number,
                "amount": amount,
                "currency": "IDR",
            },
            "payment": {
                "url": payment_url or f"https://sandbox.doku.com/checkout-link-v2/{token}",
                "token_id": token,
                "expired_date": datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S"),
            },
        }
        if envelope is ResponseEnvelope.NESTED:
            return {"message": ["SUCCESS"], "response": checkout}
        return checkout

    @staticmethod
    def error_payload(message: str = "Invalid request", code: str = "invalid_parameter") -> dict:
        return {"error": {"code": code, "message": message}}

    @staticmethod
    def build_response(status_code: int, payload: dict | str | None = None) -> requests.Response:
        """A `requests.Response` as the session would return it."""
        response = requests.Response()
        response.status_code = status_code
        if isinstance(payload, str):
            response._content = payload.encode("utf-8")
            response.headers["Content-Type"] = "text/plain"
        else:
            response._content = json.dumps(payload or {}).encode("utf-8")
            response.headers["Content-Type"] = "application/json"
        response.encoding = "utf-8"
        return response


class NotificationFactory:
    """Factory for signed gateway notifications."""

    @staticmethod
    def create(
        client_id: str,
        secret_key: str,
        request_target: str,
        payload: dict | None = None,
        **header_overrides,
    ) -> tuple[bytes, dict]:
        body = json.dumps(payload or NotificationFactory.default_payload()).encode("utf-8")
        request_id = str(uuid.uuid4())
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        headers = {
            "Content-Type": "application/json",
            "Client-Id": client_id,
            "Request-Id": request_id,
            "Request-Timestamp": timestamp,
            "Signature": generate_signature(
                client_id,
                request_id,
                request_target,
                generate_digest(body),
                secret_key,
                timestamp,
            ),
        }
        headers.update(header_overrides)
        return body, headers

    @staticmethod
    def default_payload(invoice_number: str = "INV-123", amount: int = 10000) -> dict:
        return {
            "order": {"invoice_number": invoice_number, "amount": amount},
            "transaction": {
                "status": "SUCCESS",
                "date": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                "original_request_id": str(uuid.uuid4()),
            },
            "service": {"id": "VIRTUAL_ACCOUNT"},
            "acquirer": {"id": "BCA"},
            "channel": {"id": "VIRTUAL_ACCOUNT_BCA"},
            "virtual_account_info": {"virtual_account_number": "1900600000000046"},
        }
