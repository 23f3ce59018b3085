import threading
from collections import deque

from src.models.delivery import TransportAttempt


class AttemptLogger:
    """Thread-safe log of HTTP attempts made against the gateway.

    With `max_entries` set, the oldest attempts are dropped first.
    """

    def __init__(self, max_entries: int | None = None):
        self._attempts: deque[TransportAttempt] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(self, attempt: TransportAttempt) -> None:
        with self._lock:
            self._attempts.append(attempt)

    def get_attempts(self, request_id: str | None = None) -> list[TransportAttempt]:
        with self._lock:
            if request_id is None:
                return list(self._attempts)
            return [a for a in self._attempts if a.request_id == request_id]

    def get_failed_attempts(self) -> list[TransportAttempt]:
        with self._lock:
            return [
                a for a in self._attempts
                if a.status_code is None or a.status_code >= 400
            ]

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()
