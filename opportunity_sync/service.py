"""Sync service: loads strategy inputs, runs one provider, shapes the response."""

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from .adapters import UnknownProviderError, build_adapter
from .config import Config
from .database import Persister, SupabaseClient
from .errors import PersistenceError, QuotaExceededError
from .models import Project, SyncReport, UserProfile, pair_projects
from .orchestrator import SyncOrchestrator
from .ratelimit import QuotaTracker, utc_today
from .strategy import CategorizationOracle, StrategyGenerator, build_oracle

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(error: str, details: str) -> Dict[str, Any]:
    return {"success": False, "error": error, "details": details, "timestamp": _now_iso()}


def quota_body(e: QuotaExceededError) -> Dict[str, Any]:
    return {
        "success": False,
        "message": str(e),
        "dailyUsage": e.daily_usage,
        "dailyLimit": e.daily_limit,
        "nextResetTime": e.next_reset_time.isoformat(),
    }


class SyncService:
    """Entry point shared by the HTTP trigger, the scheduler and the CLI.

    Args:
        config: application configuration
        store: Supabase client (opportunities, usage, profiles, projects)
        oracle: categorization oracle; built from config when omitted
        http_client: shared AsyncClient for provider requests (optional)
        today: UTC date source
    """

    def __init__(
        self,
        config: Config,
        store: SupabaseClient,
        oracle: Optional[CategorizationOracle] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.config = config
        self.store = store
        self.generator = StrategyGenerator(
            oracle or build_oracle(config.categorization_url, config.categorization_timeout_seconds)
        )
        self.persister = Persister(store)
        self.http_client = http_client
        self.today = today

    def _load_inputs(self) -> Tuple[List[UserProfile], List[Project]]:
        """Profiles and projects; a failed read leaves that list empty."""
        profiles: List[UserProfile] = []
        projects: List[Project] = []
        try:
            profiles = self.store.get_user_profiles()
        except Exception as e:
            logger.error(f"Error fetching user profiles: {e}")
        try:
            projects = self.store.get_projects()
        except Exception as e:
            logger.error(f"Error fetching projects: {e}")
        return profiles, projects

    async def trigger(
        self, provider: str, automated: bool = False, max_searches: Optional[int] = None
    ) -> Response:
        """Run one provider sync and return (HTTP status, JSON body).

        200 on success (including zero records and partial failures),
        404 for an unknown provider, 429 when the daily quota is spent,
        500 for configuration or persistence failures.
        """
        started_at = datetime.now(timezone.utc)
        logger.info(f"Starting {provider} sync... {'(Automated)' if automated else '(Manual)'}")

        try:
            adapter = build_adapter(provider, self.config)
        except UnknownProviderError:
            return 404, error_body("Unknown provider", f"No adapter registered for '{provider}'")
        except ValueError as e:
            logger.error(f"{provider} sync misconfigured: {e}")
            return 500, error_body(f"Failed to sync with {provider}", str(e))

        profiles, projects = self._load_inputs()
        pairings = pair_projects(profiles, projects)
        today = self.today()
        configs, insights = await self.generator.generate(adapter, pairings, profiles, projects, today)

        orchestrator = SyncOrchestrator(
            adapter,
            QuotaTracker(self.store, provider, adapter.daily_limit),
            self.persister,
            base_delay=self.config.base_delay_seconds,
            max_delay=self.config.max_backoff_seconds,
            request_timeout=self.config.request_timeout_seconds,
            http_client=self.http_client,
            today=lambda: today,
        )
        try:
            report = await orchestrator.run(configs, insights, automated=automated, max_searches=max_searches)
        except QuotaExceededError as e:
            self._record_run(provider, started_at, None, automated, "quota_exceeded", [str(e)])
            return 429, quota_body(e)
        except PersistenceError as e:
            logger.error(f"{provider} sync error: {e}")
            self._record_run(provider, started_at, None, automated, "failed", [str(e)])
            return 500, error_body(f"Failed to sync with {provider}", str(e))

        self._record_run(provider, started_at, report, automated, "completed")
        return 200, report.to_response()

    def _record_run(
        self,
        provider: str,
        started_at: datetime,
        report: Optional[SyncReport],
        automated: bool,
        status: str,
        errors: Optional[List[str]] = None,
    ) -> None:
        if report is not None:
            errors = [f"{r.config_name}: {r.error}" for r in report.search_results if r.error]
        try:
            self.store.save_sync_run(
                source=provider,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
                records_fetched=report.summary.total_fetched if report else 0,
                records_imported=report.imported if report else 0,
                errors=errors,
                status=status,
                automated=automated,
            )
        except Exception as e:
            # run history is diagnostic; the sync outcome stands
            logger.warning(f"Could not save {provider} sync run: {e}")
