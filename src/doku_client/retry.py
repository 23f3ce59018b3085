class RetryManager:
    """Decides which outcomes are transient and how long to wait between attempts."""

    DEFAULT_MAX_RETRIES = 3
    DEFAULT_BACKOFF_SECONDS = 1.0

    def __init__(self, max_retries: int | None = None, backoff_seconds: float | None = None):
        self.max_retries = max_retries if max_retries is not None else self.DEFAULT_MAX_RETRIES
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None else self.DEFAULT_BACKOFF_SECONDS
        )

    def should_retry(self, status_code: int | None) -> bool:
        """Determine if an attempt should be retried based on status code.

        Returns True for:
        - None (connection error / timeout)
        - 5xx server errors
        Returns False for everything else, 2xx and 4xx included.
        """
        if status_code is None:
            return True
        return status_code >= 500

    def next_delay(self) -> float:
        """Seconds to wait before the next attempt. The interval is constant."""
        return float(self.backoff_seconds)

    def has_attempts_remaining(self, attempt: int, max_retries: int | None = None) -> bool:
        """Check if another retry is allowed after `attempt` retries (0-indexed)."""
        budget = self.max_retries if max_retries is None else max_retries
        return attempt < budget
