import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol, TypeVar

import requests

from src.doku_client.errors import TransportError
from src.doku_client.logger import AttemptLogger
from src.doku_client.retry import RetryManager
from src.models.delivery import TransportAttempt

logger = logging.getLogger(__name__)


class _HasStatus(Protocol):
    status_code: int


ResponseT = TypeVar("ResponseT", bound=_HasStatus)


class ResilientTransport:
    """Executes gateway calls with a bounded retry budget and constant backoff."""

    def __init__(
        self,
        retry_manager: RetryManager | None = None,
        attempt_logger: AttemptLogger | None = None,
        session: requests.Session | None = None,
        timeout_seconds: float = 30,
    ):
        self.retry_manager = retry_manager or RetryManager()
        self.attempt_logger = attempt_logger
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds

    def send_prepared(
        self,
        prepared: requests.PreparedRequest,
        request_id: str = "",
        max_retries: int | None = None,
    ) -> requests.Response:
        """Send one signed request, re-sending the identical bytes on each retry."""
        return self.execute(
            lambda: self.session.send(prepared, timeout=self.timeout_seconds),
            max_retries=max_retries,
            request_id=request_id,
            url=prepared.url or "",
        )

    def execute(
        self,
        send: Callable[[], ResponseT],
        max_retries: int | None = None,
        request_id: str = "",
        url: str = "",
    ) -> ResponseT:
        """Call `send` until it yields a terminal response or the budget runs out.

        Args:
            send: Zero-argument callable performing one attempt.
            max_retries: Retries allowed after the first attempt. Defaults to
                the retry manager's budget.
            request_id: Correlates attempts in logs.
            url: Recorded with each attempt.

        Returns:
            The first 2xx/4xx response, or the last 5xx response once the
            budget is spent.

        Raises:
            TransportError: every attempt failed at the network level.
        """
        retry_count = 0

        while True:
            start = time.monotonic()
            try:
                response = send()
            except requests.exceptions.RequestException as e:
                error = _describe(e)
                self._record(request_id, url, None, start, error)
                if not self.retry_manager.has_attempts_remaining(retry_count, max_retries):
                    logger.error(
                        "Request %s failed after %d attempts: %s",
                        request_id, retry_count + 1, error,
                    )
                    raise TransportError(
                        f"Request failed after {retry_count + 1} attempts: {error}",
                        attempts=retry_count + 1,
                    ) from e
                outcome = error
            else:
                self._record(request_id, url, response.status_code, start, None)
                if not self.retry_manager.should_retry(response.status_code):
                    return response
                if not self.retry_manager.has_attempts_remaining(retry_count, max_retries):
                    logger.error(
                        "Request %s still failing after %d attempts (HTTP %d)",
                        request_id, retry_count + 1, response.status_code,
                    )
                    return response
                outcome = f"HTTP {response.status_code}"

            logger.warning(
                "Request %s attempt %d failed (%s), retrying",
                request_id, retry_count + 1, outcome,
            )
            delay = self.retry_manager.next_delay()
            if delay > 0:
                time.sleep(delay)

            retry_count += 1

    def _record(
        self,
        request_id: str,
        url: str,
        status_code: int | None,
        start: float,
        error: str | None,
    ) -> None:
        if self.attempt_logger is None:
            return
        self.attempt_logger.log(
            TransportAttempt(
                attempt_id=f"att_{uuid.uuid4().hex[:16]}",
                request_id=request_id,
                url=url,
                status_code=status_code,
                timestamp=datetime.now(timezone.utc),
                response_time_ms=(time.monotonic() - start) * 1000,
                error=error,
            )
        )


def _describe(exc: requests.exceptions.RequestException) -> str:
    if isinstance(exc, requests.exceptions.Timeout):
        return "timeout"
    if isinstance(exc, requests.exceptions.ConnectionError):
        return "connection_error"
    return str(exc)
