from .client import DokuClient
from .config import DokuSettings, load_settings
from .errors import (
    ConfigurationError,
    DokuError,
    InvalidNotificationError,
    InvalidPaymentRequestError,
    TransportError,
)
from .logger import AttemptLogger
from .retry import RetryManager
from .signer import RequestSigner
from .transport import ResilientTransport

__all__ = [
    "DokuClient",
    "DokuSettings",
    "load_settings",
    "AttemptLogger",
    "RetryManager",
    "RequestSigner",
    "ResilientTransport",
    "DokuError",
    "ConfigurationError",
    "InvalidNotificationError",
    "InvalidPaymentRequestError",
    "TransportError",
]
