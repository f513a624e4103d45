"""Retry policy point. The default policy never retries."""

from __future__ import annotations

from dataclasses import dataclass

from tracker_client_interface.errors import ServerError, TrackerError, TransportError

__all__ = ["RetryPolicy", "NO_RETRY"]


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how patiently, to repeat a failed request.

    Args:
        max_retries:    Extra attempts after the first one. 0 disables retrying
        delay:          Seconds to wait before the first retry
        backoff:        Multiplier applied to the delay after every retry
        retry_statuses: 5xx statuses considered transient
    """

    max_retries: int = 0
    delay: float = 1.0
    backoff: float = 2.0
    retry_statuses: tuple[int, ...] = (502, 503, 504)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.delay < 0 or self.backoff < 1:
            raise ValueError("delay must be >= 0 and backoff >= 1")

    def should_retry(self, error: TrackerError, attempt: int) -> bool:
        """Return True if ``error`` on attempt number ``attempt`` (1-based) is worth repeating."""
        if attempt > self.max_retries:
            return False
        if isinstance(error, TransportError):
            return True
        return isinstance(error, ServerError) and error.status in self.retry_statuses

    def wait_time(self, attempt: int) -> float:
        return self.delay * (self.backoff ** (attempt - 1))


NO_RETRY = RetryPolicy()
