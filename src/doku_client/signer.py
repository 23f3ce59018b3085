from src.models.credentials import Credentials
from src.models.signature import InboundSignatureContext, SignableRequest
from src.utils.crypto import generate_digest, generate_signature, verify_signature


class RequestSigner:
    """Signs outbound gateway requests and verifies inbound notifications."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    @property
    def client_id(self) -> str:
        return self._credentials.client_id

    def prepare(
        self,
        request_id: str,
        timestamp: str,
        request_target: str,
        body: bytes | str = b"",
    ) -> SignableRequest:
        """Collect the signing material for one call; the digest covers `body` exactly."""
        return SignableRequest(
            client_id=self._credentials.client_id,
            request_id=request_id,
            timestamp=timestamp,
            request_target=request_target,
            digest=generate_digest(body),
        )

    def sign(self, request: SignableRequest) -> str:
        return generate_signature(
            request.client_id,
            request.request_id,
            request.request_target,
            request.digest,
            self._credentials.secret_key,
            request.timestamp,
        )

    def headers(self, request: SignableRequest) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Client-Id": request.client_id,
            "Request-Id": request.request_id,
            "Request-Timestamp": request.timestamp,
            "Signature": self.sign(request),
        }

    def verify(self, body: bytes | str, inbound: InboundSignatureContext) -> bool:
        return verify_signature(
            body, inbound, self._credentials.client_id, self._credentials.secret_key
        )
