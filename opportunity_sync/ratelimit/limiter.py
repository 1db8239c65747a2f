"""Courtesy throttling and exponential backoff on HTTP 429, per run."""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type

from ..errors import BackoffExhaustedError, RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class RateLimiter:
    """Backoff state for one sync run.

    Each 429 sleeps for the current delay, doubles it (capped at
    max_delay) and retries the same call. A 429 arriving once the delay has
    reached the cap ends the run with BackoffExhaustedError. Any success
    resets the delay to base_delay.

    Args:
        base_delay: starting backoff and courtesy gap between requests (seconds)
        max_delay: backoff cap (seconds)
        sleep: awaitable sleep, injectable for tests
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float = 30.0, sleep: Optional[Sleep] = None):
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.current_delay = base_delay
        self.backoff_history: List[float] = []
        self._sleep = sleep or asyncio.sleep
        self._requests = 0

    async def throttle(self) -> None:
        """Wait base_delay before every configuration after the first."""
        if self._requests:
            await self._sleep(self.base_delay)
        self._requests += 1

    def reset(self) -> None:
        self.current_delay = self.base_delay

    @property
    def exhausted(self) -> bool:
        return self.current_delay >= self.max_delay

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.current_delay

    def _stop(self, retry_state: RetryCallState) -> bool:
        return self.exhausted

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep
        self.backoff_history.append(delay)
        self.current_delay = min(delay * 2, self.max_delay)
        logger.warning(
            "rate_limited attempt=%d backoff_s=%.1f next_backoff_s=%.1f",
            retry_state.attempt_number, delay, self.current_delay,
        )

    async def call(self, source: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Run fn, retrying on RateLimitedError with exponential backoff.

        Other exceptions propagate unchanged on first occurrence.

        Raises:
            BackoffExhaustedError: a 429 arrived with the delay already at the cap.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(RateLimitedError),
            wait=self._wait,
            stop=self._stop,
            sleep=self._sleep,
            before_sleep=self._before_sleep,
            reraise=True,
        )
        try:
            result = await retrying(fn)
        except RateLimitedError as e:
            logger.error(f"[{source}] backoff exhausted at {self.current_delay:.1f}s")
            raise BackoffExhaustedError(source, self.current_delay) from e
        self.reset()
        return result
