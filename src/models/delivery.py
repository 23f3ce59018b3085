from dataclasses import dataclass
from datetime import datetime


@dataclass
class TransportAttempt:
    attempt_id: str
    request_id: str
    url: str
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    error: str | None = None
