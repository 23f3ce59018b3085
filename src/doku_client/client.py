import json
import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Self

import pydantic
import requests

from src.doku_client.config import DokuSettings, load_settings
from src.doku_client.envelope import extract_checkout
from src.doku_client.errors import InvalidNotificationError, InvalidPaymentRequestError
from src.doku_client.retry import RetryManager
from src.doku_client.signer import RequestSigner
from src.doku_client.transport import ResilientTransport
from src.models.credentials import Credentials
from src.models.payment import (
    DEFAULT_EXPIRED_TIME_MINUTES,
    DEFAULT_PAYMENT_METHOD_TYPES,
    PaymentRequest,
    PaymentResult,
)
from src.models.signature import InboundSignatureContext
from src.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)

PAYMENT_TARGET = "/checkout/v1/payment"

GENERIC_ERROR_MESSAGE = "Internal server error"
PROVIDER_ERROR_MESSAGE = "Failed to create payment"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from payment gateway"


class DokuClient:
    """Creates DOKU Checkout payments and verifies DOKU notifications."""

    def __init__(
        self,
        credentials: Credentials,
        transport: ResilientTransport | None = None,
        base_url: str | None = None,
        metrics: MetricsCollector | None = None,
        request_id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.credentials = credentials
        self.signer = RequestSigner(credentials)
        self.transport = transport or ResilientTransport()
        self.base_url = (base_url or credentials.base_url).rstrip("/")
        self.metrics = metrics
        self._new_request_id = request_id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(cls, settings: DokuSettings | None = None, **kwargs) -> Self:
        settings = settings or load_settings()
        kwargs.setdefault(
            "transport",
            ResilientTransport(
                retry_manager=RetryManager(
                    max_retries=settings.max_retries,
                    backoff_seconds=settings.retry_backoff_seconds,
                ),
                timeout_seconds=settings.timeout_seconds,
            ),
        )
        return cls(settings.credentials(), **kwargs)

    def create_payment(self, payment: PaymentRequest | Mapping[str, Any]) -> PaymentResult:
        """Create a checkout payment. Never raises; failures come back as results."""
        try:
            return self._create_payment(payment)
        except InvalidPaymentRequestError as e:
            logger.warning("Payment request rejected: %s", e)
            return self._failed(GENERIC_ERROR_MESSAGE, e.errors, reason="validation")
        except Exception as e:
            logger.exception("DOKU payment creation error")
            details = {"type": type(e).__name__, "message": str(e)}
            return self._failed(GENERIC_ERROR_MESSAGE, details, reason="internal")

    def _create_payment(self, payment: PaymentRequest | Mapping[str, Any]) -> PaymentResult:
        validated = validate_payment_request(payment)

        request_id = self._new_request_id()
        timestamp = format_request_timestamp(self._clock())
        body = serialize_body(build_checkout_body(validated, request_id))

        signable = self.signer.prepare(request_id, timestamp, PAYMENT_TARGET, body)
        prepared = requests.Request(
            "POST",
            f"{self.base_url}{PAYMENT_TARGET}",
            data=body,
            headers=self.signer.headers(signable),
        ).prepare()

        response = self.transport.send_prepared(prepared, request_id=request_id)

        if not 200 <= response.status_code < 300:
            return self._provider_failure(response, request_id)

        payload = response.json()
        checkout = extract_checkout(payload)
        if not checkout.payment_url or not checkout.invoice_number:
            logger.warning("Request %s: success response without checkout data", request_id)
            return self._failed(UNEXPECTED_RESPONSE_MESSAGE, payload, reason="unexpected_response")

        logger.info("Request %s: created checkout for invoice %s", request_id, checkout.invoice_number)
        if self.metrics is not None:
            self.metrics.record_success()
        return PaymentResult.succeeded(
            payment_url=checkout.payment_url,
            invoice_number=checkout.invoice_number,
            amount=checkout.amount,
        )

    def _provider_failure(self, response: requests.Response, request_id: str) -> PaymentResult:
        try:
            error_body = response.json()
        except ValueError:
            error_body = {"status_code": response.status_code, "body": response.text}

        message = _provider_message(error_body) or PROVIDER_ERROR_MESSAGE
        logger.warning(
            "Request %s: gateway rejected payment (HTTP %d): %s",
            request_id, response.status_code, message,
        )
        return self._failed(message, error_body, reason="provider")

    def _failed(self, message: str, details: Any, reason: str) -> PaymentResult:
        if self.metrics is not None:
            self.metrics.record_failure(reason)
        return PaymentResult.failed(message, details)

    def verify_signature(self, body: bytes | str, inbound: InboundSignatureContext) -> bool:
        return self.signer.verify(body, inbound)

    def verify_notification(
        self,
        body: bytes | str,
        headers: Mapping[str, str],
        request_target: str,
    ) -> bool:
        """Verify a notification exactly as received.

        Args:
            body: Raw request body, not re-serialized.
            headers: Request headers; only the four signature headers are read.
            request_target: Path of the endpoint that received the notification.
        """
        inbound = InboundSignatureContext.from_headers(headers, request_target)
        return self.signer.verify(body, inbound)

    def parse_notification(
        self,
        body: bytes | str,
        headers: Mapping[str, str],
        request_target: str,
    ) -> dict:
        """Return the notification payload after its signature checks out."""
        if not self.verify_notification(body, headers, request_target):
            raise InvalidNotificationError("Notification signature verification failed")
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise InvalidNotificationError("Notification body is not valid JSON") from e
        if not isinstance(payload, dict):
            raise InvalidNotificationError("Notification body is not a JSON object")
        return payload


def validate_payment_request(payment: PaymentRequest | Mapping[str, Any]) -> PaymentRequest:
    if isinstance(payment, PaymentRequest):
        return payment
    try:
        return PaymentRequest.model_validate(payment)
    except pydantic.ValidationError as e:
        raise InvalidPaymentRequestError(e.errors(include_url=False, include_context=False)) from e


def build_checkout_body(payment: PaymentRequest, request_id: str) -> dict:
    if payment.payment_method_types is None:
        method_types = list(DEFAULT_PAYMENT_METHOD_TYPES)
    else:
        method_types = list(payment.payment_method_types)

    return {
        "order": {
            "amount": payment.amount,
            "invoice_number": payment.order_id,
            "currency": "IDR",
            "callback_url": payment.return_url,
        },
        "payment": {
            "payment_due_date": payment.expired_time or DEFAULT_EXPIRED_TIME_MINUTES,
            "payment_method_types": method_types,
        },
        "customer": {
            "id": payment.customer_email or f"GUEST-{request_id[:8]}",
            "name": payment.customer_name,
            "phone": payment.customer_phone,
            "country": "ID",
        },
    }


def serialize_body(body: dict) -> bytes:
    """Compact JSON; these exact bytes are digested and sent."""
    return json.dumps(
        body, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    ).encode("utf-8")


def format_request_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _provider_message(error_body: Any) -> str | None:
    if not isinstance(error_body, dict):
        return None
    error = error_body.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None
