from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

from requests.structures import CaseInsensitiveDict


@dataclass(frozen=True)
class SignableRequest:
    client_id: str
    request_id: str
    timestamp: str  # UTC, second precision, trailing "Z"
    request_target: str  # path only, no host or query
    digest: str = ""


@dataclass(frozen=True)
class InboundSignatureContext:
    signature: str | None
    timestamp: str | None
    request_id: str | None
    client_id: str | None
    request_target: str

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], request_target: str) -> Self:
        """Read the signature headers of an inbound notification.

        The request target is never sent by the gateway; the receiver passes
        the path its own endpoint is mounted on.
        """
        lookup = CaseInsensitiveDict(headers)
        return cls(
            signature=lookup.get("Signature"),
            timestamp=lookup.get("Request-Timestamp"),
            request_id=lookup.get("Request-Id"),
            client_id=lookup.get("Client-Id"),
            request_target=request_target,
        )
