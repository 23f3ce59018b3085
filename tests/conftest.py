import pytest

from src.doku_client.client import DokuClient
from src.doku_client.logger import AttemptLogger
from src.doku_client.retry import RetryManager
from src.doku_client.signer import RequestSigner
from src.doku_client.transport import ResilientTransport
from src.models.credentials import Credentials
from src.observability.metrics import MetricsCollector
from src.sandbox.gateway import SandboxGatewayServer
from src.utils.factories import GatewayResponseFactory, NotificationFactory, PaymentRequestFactory


CLIENT_ID = "TEST-CLIENT-ID"
SECRET_KEY = "TEST-SECRET-KEY"


class ScriptedSession:
    """Stands in for requests.Session, replaying outcomes in order.

    The last outcome repeats once the script runs out. Exceptions are raised.
    """

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def credentials():
    return Credentials(client_id=CLIENT_ID, secret_key=SECRET_KEY)


@pytest.fixture
def secret_key():
    return SECRET_KEY


@pytest.fixture
def client_id():
    return CLIENT_ID


@pytest.fixture
def signer(credentials):
    return RequestSigner(credentials)


@pytest.fixture
def retry_manager():
    """Default budget with no waiting between attempts."""
    return RetryManager(backoff_seconds=0)


@pytest.fixture
def attempt_logger():
    return AttemptLogger()


@pytest.fixture
def metrics():
    return MetricsCollector(window_seconds=300)


@pytest.fixture
def scripted_client(credentials, retry_manager, attempt_logger, metrics):
    """Build a client whose session replays the given responses/exceptions."""

    def build(*outcomes, **client_kwargs):
        session = ScriptedSession(outcomes)
        transport = ResilientTransport(
            retry_manager=retry_manager,
            attempt_logger=attempt_logger,
            session=session,
            timeout_seconds=5,
        )
        client = DokuClient(credentials, transport=transport, metrics=metrics, **client_kwargs)
        return client, session

    return build


@pytest.fixture
def sandbox_gateway():
    server = SandboxGatewayServer(client_id=CLIENT_ID, secret_key=SECRET_KEY)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def gateway_transport(retry_manager, attempt_logger):
    return ResilientTransport(
        retry_manager=retry_manager,
        attempt_logger=attempt_logger,
        timeout_seconds=5,
    )


@pytest.fixture
def gateway_client(credentials, gateway_transport, metrics, sandbox_gateway):
    """Client pointed at the local sandbox gateway."""
    return DokuClient(
        credentials,
        transport=gateway_transport,
        base_url=sandbox_gateway.base_url,
        metrics=metrics,
    )


@pytest.fixture
def payment_factory():
    return PaymentRequestFactory


@pytest.fixture
def response_factory():
    return GatewayResponseFactory


@pytest.fixture
def notification_factory():
    return NotificationFactory
