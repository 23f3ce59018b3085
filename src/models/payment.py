from dataclasses import dataclass
from typing import Annotated, Any, Self

from pydantic import (
    AnyUrl,
    BaseModel,
    EmailStr,
    Field,
    PositiveInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

DEFAULT_EXPIRED_TIME_MINUTES = 60

DEFAULT_PAYMENT_METHOD_TYPES = (
    "VIRTUAL_ACCOUNT_BCA",
    "VIRTUAL_ACCOUNT_BANK_MANDIRI",
    "VIRTUAL_ACCOUNT_BANK_SYARIAH_MANDIRI",
    "VIRTUAL_ACCOUNT_DOKU",
    "VIRTUAL_ACCOUNT_BRI",
    "VIRTUAL_ACCOUNT_BNI",
    "VIRTUAL_ACCOUNT_BANK_PERMATA",
    "VIRTUAL_ACCOUNT_BANK_CIMB",
    "VIRTUAL_ACCOUNT_BANK_DANAMON",
    "ONLINE_TO_OFFLINE_ALFA",
    "CREDIT_CARD",
    "DIRECT_DEBIT_BRI",
    "EMONEY_SHOPEEPAY",
    "EMONEY_OVO",
    "QRIS",
    "PEER_TO_PEER_AKULAKU",
    "PEER_TO_PEER_KREDIVO",
    "PEER_TO_PEER_INDODANA",
)

_URL = TypeAdapter(AnyUrl)


class PaymentRequest(BaseModel):
    """Caller input for a checkout payment."""

    order_id: str = Field(min_length=1)
    amount: PositiveInt | Annotated[float, Field(gt=0, allow_inf_nan=False)]
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr | None = None
    customer_phone: str = Field(min_length=1)
    description: str | None = None
    return_url: str
    expired_time: PositiveInt | None = None  # minutes
    payment_method_types: list[str] | None = None

    @field_validator("return_url")
    @classmethod
    def _check_return_url(cls, value: str) -> str:
        try:
            _URL.validate_python(value)
        except ValidationError:
            raise ValueError("Invalid return URL") from None
        return value


@dataclass
class PaymentResult:
    success: bool
    payment_url: str | None = None
    invoice_number: str | None = None
    amount: int | float | None = None
    message: str | None = None
    details: Any = None

    @classmethod
    def succeeded(
        cls,
        payment_url: str,
        invoice_number: str,
        amount: int | float | None = None,
    ) -> Self:
        return cls(
            success=True,
            payment_url=payment_url,
            invoice_number=invoice_number,
            amount=amount,
        )

    @classmethod
    def failed(cls, message: str, details: Any = None) -> Self:
        return cls(success=False, message=message, details=details)
