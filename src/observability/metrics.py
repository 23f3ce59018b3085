import threading
import time
from collections import Counter


class MetricsCollector:
    """Rolling-window counts of payment creation outcomes."""

    def __init__(self, window_seconds: float = 300):
        self._window_seconds = window_seconds
        self._successes: list[float] = []  # timestamps
        self._failures: list[tuple[float, str]] = []  # (timestamp, reason)
        self._lock = threading.Lock()

    def record_success(self) -> None:
        with self._lock:
            self._successes.append(time.monotonic())

    def record_failure(self, reason: str | None = None) -> None:
        with self._lock:
            self._failures.append((time.monotonic(), reason or "unknown"))

    def _cutoff(self) -> float:
        return time.monotonic() - self._window_seconds

    def _recent_successes(self) -> list[float]:
        cutoff = self._cutoff()
        return [t for t in self._successes if t >= cutoff]

    def _recent_failures(self) -> list[tuple[float, str]]:
        cutoff = self._cutoff()
        return [f for f in self._failures if f[0] >= cutoff]

    def failure_rate(self) -> float:
        """Failure rate in the current rolling window (0.0 to 1.0)."""
        with self._lock:
            successes = len(self._recent_successes())
            failures = len(self._recent_failures())
            total = successes + failures
            if total == 0:
                return 0.0
            return failures / total

    def total_in_window(self) -> int:
        with self._lock:
            return len(self._recent_successes()) + len(self._recent_failures())

    def failure_count_in_window(self) -> int:
        with self._lock:
            return len(self._recent_failures())

    def success_count_in_window(self) -> int:
        with self._lock:
            return len(self._recent_successes())

    def failure_reasons(self) -> dict[str, int]:
        """Failures in the current window grouped by reason."""
        with self._lock:
            return dict(Counter(reason for _, reason in self._recent_failures()))

    def reset(self) -> None:
        with self._lock:
            self._successes.clear()
            self._failures.clear()
