from .crypto import (
    build_canonical_string,
    generate_digest,
    generate_signature,
    verify_signature,
)
from .factories import GatewayResponseFactory, NotificationFactory, PaymentRequestFactory

__all__ = [
    "build_canonical_string", "generate_digest",
    "generate_signature", "verify_signature",
    "PaymentRequestFactory", "GatewayResponseFactory", "NotificationFactory",
]
