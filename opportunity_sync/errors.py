"""Exception types shared across the sync pipeline."""

from datetime import datetime
from typing import Optional


class SyncError(Exception):
    """Base class for sync pipeline errors."""


class ProviderError(SyncError):
    """A provider request did not produce a usable response."""

    def __init__(self, source: str, message: str):
        super().__init__(f"[{source}] {message}")
        self.source = source


class ProviderRequestError(ProviderError):
    """Transport-level failure: connection error, timeout, unreadable body."""


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, source: str, status_code: int, body: str = ""):
        super().__init__(source, f"API Error: {status_code} - {body[:200]}")
        self.status_code = status_code
        self.body = body


class RateLimitedError(ProviderHTTPError):
    """Provider answered HTTP 429."""

    def __init__(self, source: str, body: str = ""):
        super().__init__(source, 429, body)


class BackoffExhaustedError(SyncError):
    """Backoff delay hit its cap; the rest of the run is abandoned."""

    def __init__(self, source: str, delay: float):
        super().__init__(
            f"[{source}] Rate limit backoff reached {delay:.1f}s cap, abandoning remaining searches"
        )
        self.source = source
        self.delay = delay


class QuotaExceededError(SyncError):
    """Daily request budget for a provider is used up."""

    def __init__(
        self,
        source: str,
        daily_usage: int,
        daily_limit: Optional[int],
        next_reset_time: datetime,
    ):
        super().__init__(
            f"{source} daily rate limit exceeded ({daily_limit} requests per day)"
        )
        self.source = source
        self.daily_usage = daily_usage
        self.daily_limit = daily_limit
        self.next_reset_time = next_reset_time


class PersistenceError(SyncError):
    """Writing to the opportunity store failed."""
