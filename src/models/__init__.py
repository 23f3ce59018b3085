from .credentials import Credentials, Environment
from .payment import PaymentRequest, PaymentResult
from .signature import InboundSignatureContext, SignableRequest
from .delivery import TransportAttempt

__all__ = [
    "Credentials", "Environment",
    "PaymentRequest", "PaymentResult",
    "InboundSignatureContext", "SignableRequest",
    "TransportAttempt",
]
