class DokuError(RuntimeError):
    """Base class for DOKU client errors."""


class ConfigurationError(DokuError):
    """Raised when gateway credentials or settings cannot be loaded."""


class InvalidPaymentRequestError(DokuError):
    """Raised when caller input fails the payment-request schema."""

    def __init__(self, errors: list[dict]):
        super().__init__(f"Payment request failed validation ({len(errors)} errors)")
        self.errors = errors


class TransportError(DokuError):
    """Raised when every attempt of a request failed at the network level."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class InvalidNotificationError(DokuError):
    """Raised when an inbound notification fails verification or parsing."""
