import base64
import hashlib
import hmac

from src.models.signature import InboundSignatureContext

ALGORITHM_TAG = "HMACSHA256="


def build_canonical_string(
    client_id: str,
    request_id: str,
    timestamp: str,
    request_target: str,
    digest: str = "",
) -> str:
    """Render the signature components in their fixed order.

    The Digest line only appears for requests with a body; adding or dropping
    it changes the signed bytes.
    """
    components = [
        f"Client-Id:{client_id}",
        f"Request-Id:{request_id}",
        f"Request-Timestamp:{timestamp}",
        f"Request-Target:{request_target}",
    ]
    if digest:
        components.append(f"Digest:{digest}")
    return "\n".join(components)


def generate_digest(body: bytes | str) -> str:
    """Base64-encoded SHA-256 of the raw request body."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")


def generate_signature(
    client_id: str,
    request_id: str,
    request_target: str,
    digest: str,
    secret_key: str,
    timestamp: str,
) -> str:
    """Generate the HMAC-SHA256 request signature, tagged with its algorithm."""
    message = build_canonical_string(client_id, request_id, timestamp, request_target, digest)
    mac = hmac.new(
        secret_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return ALGORITHM_TAG + base64.b64encode(mac).decode("ascii")


def verify_signature(
    body: bytes | str,
    inbound: InboundSignatureContext,
    expected_client_id: str,
    secret_key: str,
) -> bool:
    """Verify an inbound signature against the raw body it arrived with.

    Returns False for any missing header or client mismatch before hashing.
    """
    if not (inbound.signature and inbound.timestamp and inbound.request_id and inbound.client_id):
        return False
    if inbound.client_id != expected_client_id:
        return False

    expected = generate_signature(
        inbound.client_id,
        inbound.request_id,
        inbound.request_target,
        generate_digest(body),
        secret_key,
        inbound.timestamp,
    )
    return hmac.compare_digest(expected.encode("utf-8"), inbound.signature.encode("utf-8"))
