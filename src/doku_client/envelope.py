from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResponseEnvelope(Enum):
    NESTED = "NESTED"
    FLAT = "FLAT"


EXTRACTION_ORDER = (ResponseEnvelope.NESTED, ResponseEnvelope.FLAT)


@dataclass
class CheckoutDetails:
    payment_url: str | None
    invoice_number: str | None
    amount: int | float | None


def envelope_body(payload: Any, envelope: ResponseEnvelope) -> dict:
    if not isinstance(payload, dict):
        return {}
    if envelope is ResponseEnvelope.NESTED:
        inner = payload.get("response")
        return inner if isinstance(inner, dict) else {}
    return payload


def extract_checkout(payload: Any) -> CheckoutDetails:
    return CheckoutDetails(
        payment_url=_first(payload, "payment", "url"),
        invoice_number=_first(payload, "order", "invoice_number"),
        amount=_first(payload, "order", "amount"),
    )


def _first(payload: Any, *path: str) -> Any:
    for envelope in EXTRACTION_ORDER:
        value = _lookup(envelope_body(payload, envelope), path)
        if value:
            return value
    return None


def _lookup(section: dict, path: tuple[str, ...]) -> Any:
    value: Any = section
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value
