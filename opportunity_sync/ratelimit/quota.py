"""Per-provider daily request quotas backed by the provider_usage table."""

import logging
import sys
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

# remaining() for providers without a daily cap
UNLIMITED = sys.maxsize


class UsageStore(Protocol):
    def get_daily_usage(self, provider: str, day: date) -> int: ...

    def increment_daily_usage(self, provider: str, day: date, limit: Optional[int]) -> Optional[int]: ...


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def next_reset_time(day: date) -> datetime:
    """Quotas reset at the next UTC midnight after `day`."""
    return datetime.combine(day + timedelta(days=1), time.min, tzinfo=timezone.utc)


class QuotaTracker:
    """Reads and reserves daily request budget for one provider.

    Counts survive restarts because they live in the store. Reservation is
    an atomic increment-and-check in the database, so concurrent runs
    cannot both spend the last unit.
    """

    def __init__(self, store: UsageStore, provider: str, daily_limit: Optional[int]):
        self.store = store
        self.provider = provider
        self.daily_limit = daily_limit

    @property
    def unlimited(self) -> bool:
        return self.daily_limit is None

    def daily_usage(self, day: date) -> int:
        return self.store.get_daily_usage(self.provider, day)

    def remaining(self, day: date) -> int:
        if self.unlimited:
            return UNLIMITED
        return max(0, self.daily_limit - self.daily_usage(day))

    def try_acquire(self, day: date) -> bool:
        """Reserve one request for `day`; False when the cap is already reached."""
        count = self.store.increment_daily_usage(self.provider, day, self.daily_limit)
        if count is None:
            logger.warning(
                "quota_exhausted provider=%s date=%s limit=%s", self.provider, day, self.daily_limit
            )
            return False
        logger.debug("quota_reserved provider=%s date=%s count=%d limit=%s",
                     self.provider, day, count, self.daily_limit)
        return True

    def record_usage(self, day: date) -> None:
        """Count one request that was issued without a prior reservation."""
        self.store.increment_daily_usage(self.provider, day, None)
