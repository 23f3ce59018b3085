import json
import threading
import time
from collections import deque
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Self

from src.doku_client.envelope import ResponseEnvelope
from src.models.signature import InboundSignatureContext
from src.utils.crypto import verify_signature
from src.utils.factories import GatewayResponseFactory

CHECKOUT_PATH = "/checkout/v1/payment"


class _CheckoutHandler(BaseHTTPRequestHandler):
    """HTTP request handler emulating the checkout endpoint."""

    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        server_config = self.server.config  # type: ignore[attr-defined]

        if server_config["response_delay"] > 0:
            time.sleep(server_config["response_delay"])

        if self.path != CHECKOUT_PATH:
            self._reply(404, GatewayResponseFactory.error_payload("Not found", "not_found"))
            return

        headers = dict(self.headers)
        inbound = InboundSignatureContext.from_headers(headers, self.path)
        signature_valid = verify_signature(
            body, inbound, server_config["client_id"], server_config["secret_key"]
        )

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, ValueError):
            payload = None

        with server_config["lock"]:
            server_config["received_requests"].append({
                "request_id": inbound.request_id,
                "headers": headers,
                "body": body,
                "payload": payload,
                "signature_valid": signature_valid,
            })

        if not signature_valid:
            self._reply(401, GatewayResponseFactory.error_payload("Invalid signature", "invalid_signature"))
            return

        if payload is None:
            self._reply(400, GatewayResponseFactory.error_payload("Invalid JSON", "invalid_json"))
            return

        with server_config["lock"]:
            queued = server_config["queued_codes"]
            code = queued.popleft() if queued else server_config["response_code"]

        if 200 <= code < 300:
            order = payload.get("order", {}) if isinstance(payload, dict) else {}
            self._reply(code, GatewayResponseFactory.checkout_payload(
                invoice_number=order.get("invoice_number"),
                amount=order.get("amount"),
                envelope=server_config["envelope"],
            ))
        else:
            self._reply(code, GatewayResponseFactory.error_payload(server_config["error_message"]))

    def _reply(self, code: int, payload: dict) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode())

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class SandboxGatewayServer:
    """Local stand-in for the DOKU checkout API that verifies request signatures."""

    def __init__(
        self,
        client_id: str,
        secret_key: str,
        host: str = "127.0.0.1",
        port: int = 0,
    ):
        self._host = host
        self._port = port
        self._config = {
            "client_id": client_id,
            "secret_key": secret_key,
            "response_code": 200,
            "queued_codes": deque(),
            "response_delay": 0,
            "envelope": ResponseEnvelope.NESTED,
            "error_message": "Invalid request",
            "received_requests": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_response_code(self, code: int) -> Self:
        self._config["response_code"] = code
        return self

    def queue_response_codes(self, *codes: int) -> Self:
        """Answer the next verified requests with these codes, then the default."""
        with self._config["lock"]:
            self._config["queued_codes"].extend(codes)
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def set_envelope(self, envelope: ResponseEnvelope) -> Self:
        self._config["envelope"] = envelope
        return self

    def set_error_message(self, message: str) -> Self:
        self._config["error_message"] = message
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _CheckoutHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        # Get the actual port (useful when port=0)
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{CHECKOUT_PATH}"

    @property
    def port(self) -> int:
        return self._port

    def get_received_requests(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received_requests"])

    def get_request_count(self) -> int:
        with self._config["lock"]:
            return len(self._config["received_requests"])

    def clear_requests(self) -> None:
        with self._config["lock"]:
            self._config["received_requests"].clear()
            self._config["queued_codes"].clear()
