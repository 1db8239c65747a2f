"""Daily quotas and 429 backoff."""

from .limiter import RateLimiter
from .quota import UNLIMITED, QuotaTracker, next_reset_time, utc_today

__all__ = ["QuotaTracker", "RateLimiter", "UNLIMITED", "next_reset_time", "utc_today"]
