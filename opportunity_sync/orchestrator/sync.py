"""Single-provider sync run: quota check, execution, dedup, normalize, persist."""

import asyncio
import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import httpx

from ..adapters.base import ADAPTER_TIMEOUT, BaseAdapter
from ..database.persister import Persister
from ..deduplicator import Deduplicator
from ..errors import (
    BackoffExhaustedError,
    ProviderError,
    ProviderRequestError,
    QuotaExceededError,
)
from ..models import (
    CanonicalOpportunity,
    ExternalRecord,
    SearchConfiguration,
    StrategyInsight,
    SyncReport,
    SyncRunResult,
    SyncSummary,
)
from ..normalizer import Normalizer
from ..ratelimit import QuotaTracker, RateLimiter, next_reset_time, utc_today
from ..ratelimit.limiter import Sleep

logger = logging.getLogger(__name__)

# What each provider's records are called in run messages
RECORD_NOUNS = {
    "grants_gov": "grant opportunities",
    "sam_gov": "government contract opportunities",
    "nih": "NIH research projects",
    "nsf": "NSF research awards",
    "candid": "foundation grants",
}

SAMPLE_SIZE = 5


class SyncState(str, Enum):
    IDLE = "idle"
    QUOTA_CHECK = "quota_check"
    EXECUTING = "executing"
    DEDUPLICATING = "deduplicating"
    NORMALIZING = "normalizing"
    PERSISTING = "persisting"
    DONE = "done"


class SyncOrchestrator:
    """Runs a list of search configurations against one provider.

    Configurations execute one at a time. Every request attempt (retries
    included) first reserves a unit of the provider's daily quota; when a
    reservation fails or 429 backoff reaches its cap the remaining
    configurations are reported as skipped. Backoff and dedup state are
    created fresh for each run.
    """

    def __init__(
        self,
        adapter: BaseAdapter,
        quota: QuotaTracker,
        persister: Persister,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        request_timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        today: Callable[[], date] = utc_today,
        sleep: Optional[Sleep] = None,
    ):
        self.adapter = adapter
        self.quota = quota
        self.persister = persister
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.request_timeout = request_timeout
        self.http_client = http_client
        self.today = today
        self.sleep = sleep
        self.state = SyncState.IDLE
        self.history: List[SyncState] = [SyncState.IDLE]
        self.limiter: Optional[RateLimiter] = None

    @property
    def source(self) -> str:
        return self.adapter.source_name

    def _enter(self, state: SyncState) -> None:
        logger.debug(f"[{self.source}] {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def run(
        self,
        configs: Sequence[SearchConfiguration],
        insights: Sequence[StrategyInsight] = (),
        automated: bool = False,
        max_searches: Optional[int] = None,
    ) -> SyncReport:
        """Execute configurations and persist what they find.

        Args:
            configs: generated configurations, highest priority first
            insights: AI-tier insights echoed in the report
            automated: run was triggered by the scheduler
            max_searches: optional cap on configurations executed

        Returns:
            SyncReport for the trigger response

        Raises:
            QuotaExceededError: no quota left today; no provider call was made
            PersistenceError: the batch upsert failed
        """
        self.state = SyncState.IDLE
        self.history = [SyncState.IDLE]
        day = self.today()

        self._enter(SyncState.QUOTA_CHECK)
        remaining = self.quota.remaining(day)
        if remaining <= 0:
            usage = self.quota.daily_usage(day)
            logger.warning(f"[{self.source}] daily limit reached: {usage}/{self.quota.daily_limit}")
            raise QuotaExceededError(self.source, usage, self.quota.daily_limit, next_reset_time(day))

        budget = min(len(configs), remaining)
        if max_searches is not None:
            budget = min(budget, max(0, max_searches))
        if budget < len(configs):
            logger.info(f"[{self.source}] limiting searches from {len(configs)} to {budget}")
        to_run, deferred = list(configs[:budget]), list(configs[budget:])

        self._enter(SyncState.EXECUTING)
        self.limiter = RateLimiter(self.base_delay, self.max_delay, sleep=self.sleep)
        dedup = Deduplicator(self.adapter.unique_id_of)
        if self.http_client is not None:
            results = await self._execute_all(self.http_client, to_run, dedup, day)
        else:
            async with httpx.AsyncClient(timeout=ADAPTER_TIMEOUT) as client:
                results = await self._execute_all(client, to_run, dedup, day)
        results.extend(self._skipped(c) for c in deferred)

        fetched = dedup.records
        logger.info(f"[{self.source}] total unique records found: {len(fetched)}")
        if not fetched:
            self._enter(SyncState.DONE)
            return self._report(configs, insights, results, fetched, [], 0, automated, day)

        self._enter(SyncState.DEDUPLICATING)
        # dedup ran incrementally per configuration; this is the run-level view
        unique = list(fetched)

        self._enter(SyncState.NORMALIZING)
        valid = Normalizer(self.adapter).normalize_all(unique)

        self._enter(SyncState.PERSISTING)
        imported = self.persister.upsert(valid)
        logger.info(f"[{self.source}] successfully imported {imported} records")

        self._enter(SyncState.DONE)
        return self._report(configs, insights, results, unique, valid, imported, automated, day)

    async def _execute_all(
        self,
        client: httpx.AsyncClient,
        configs: List[SearchConfiguration],
        dedup: Deduplicator,
        day: date,
    ) -> List[SyncRunResult]:
        results: List[SyncRunResult] = []
        abandoned = False
        for i, config in enumerate(configs, start=1):
            if abandoned:
                results.append(self._skipped(config))
                continue
            logger.info(f"[{self.source}] executing {i}/{len(configs)}: {config.name}")
            result, abandoned = await self._execute_one(client, config, dedup, day)
            results.append(result)
        return results

    async def _execute_one(
        self,
        client: httpx.AsyncClient,
        config: SearchConfiguration,
        dedup: Deduplicator,
        day: date,
    ) -> Tuple[SyncRunResult, bool]:
        """Run one configuration; the bool is True when the run must stop."""
        attempts = 0
        url = self.adapter.redact(str(self.adapter.build_request(config).url))

        async def attempt() -> List[ExternalRecord]:
            nonlocal attempts
            if not self.quota.try_acquire(day):
                raise QuotaExceededError(
                    self.source, self.quota.daily_usage(day), self.quota.daily_limit, next_reset_time(day)
                )
            attempts += 1
            return await self._send(client, config)

        await self.limiter.throttle()
        try:
            records = await self.limiter.call(self.source, attempt)
        except QuotaExceededError as e:
            logger.warning(f"[{self.source}] {e}; stopping run")
            if attempts == 0:
                return self._skipped(config), True
            return self._failed(config, str(e), attempts, url), True
        except BackoffExhaustedError as e:
            return self._failed(config, str(e), attempts, url), True
        except ProviderError as e:
            logger.error(f"[{self.source}] search failed for {config.name}: {e}")
            return self._failed(config, str(e), attempts, url), False

        new_records = dedup.add_batch(records)
        logger.info(
            f"[{self.source}] {config.name}: {len(records)} records found, {len(new_records)} new"
        )
        return SyncRunResult(
            config_name=config.name,
            strategy_kind=config.origin.strategy_kind,
            related_project_id=config.origin.related_project_id,
            record_count=len(records),
            new_records=len(new_records),
            attempts=attempts,
            url=url,
        ), False

    async def _send(self, client: httpx.AsyncClient, config: SearchConfiguration) -> List[ExternalRecord]:
        try:
            return await asyncio.wait_for(self.adapter.execute(client, config), self.request_timeout)
        except asyncio.TimeoutError as e:
            raise ProviderRequestError(
                self.source, f"Request timed out after {self.request_timeout:.0f}s"
            ) from e

    @staticmethod
    def _skipped(config: SearchConfiguration) -> SyncRunResult:
        return SyncRunResult(
            config_name=config.name,
            strategy_kind=config.origin.strategy_kind,
            related_project_id=config.origin.related_project_id,
            skipped=True,
        )

    @staticmethod
    def _failed(config: SearchConfiguration, error: str, attempts: int, url: str) -> SyncRunResult:
        return SyncRunResult(
            config_name=config.name,
            strategy_kind=config.origin.strategy_kind,
            related_project_id=config.origin.related_project_id,
            error=error,
            attempts=attempts,
            url=url,
        )

    def _report(
        self,
        configs: Sequence[SearchConfiguration],
        insights: Sequence[StrategyInsight],
        results: List[SyncRunResult],
        fetched: List[ExternalRecord],
        valid: List[CanonicalOpportunity],
        imported: int,
        automated: bool,
        day: date,
    ) -> SyncReport:
        noun = RECORD_NOUNS.get(self.source, "opportunities")
        if fetched:
            message = f"Successfully imported {imported} {noun}"
        else:
            message = f"No {noun} found with current search criteria"

        daily_usage = None
        if not self.quota.unlimited:
            daily_usage = self.quota.daily_usage(day)

        return SyncReport(
            success=True,
            imported=imported,
            message=message,
            summary=SyncSummary(
                total_fetched=len(fetched),
                total_processed=len(fetched),
                total_valid=len(valid),
                total_imported=imported,
                strategies_used=len(insights),
                total_search_configurations=len(configs),
                source=self.source,
                last_sync=datetime.now(timezone.utc),
                automated=automated,
            ),
            search_results=results,
            sample_records=[
                {"title": o.title, "amount": o.amount_min, "sponsor": o.sponsor}
                for o in valid[:SAMPLE_SIZE]
            ],
            ai_insights=[i.model_dump() for i in insights],
            daily_usage=daily_usage,
            daily_limit=self.quota.daily_limit,
        )
