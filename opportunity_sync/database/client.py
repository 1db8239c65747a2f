"""Supabase database client for the opportunity sync service."""

import logging
import os
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from ..models import Project, UserProfile

logger = logging.getLogger(__name__)

OPPORTUNITIES_TABLE = "opportunities"
USAGE_TABLE = "provider_usage"
CONFLICT_KEY = "external_id,source"


class SupabaseClient:
    """Client for the opportunities, provider_usage, profile and sync_runs tables."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        """Initialize Supabase client from explicit args or env vars.

        Args:
            url: Supabase project URL (falls back to SUPABASE_URL env var).
            key: Supabase service key (falls back to SUPABASE_KEY env var).
        """
        self._url = url or os.environ["SUPABASE_URL"]
        self._key = key or os.environ["SUPABASE_KEY"]
        self._client: Client = create_client(self._url, self._key)

    # ------------------------------------------------------------------
    # Opportunities
    # ------------------------------------------------------------------

    def upsert_opportunities(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert or replace opportunity rows keyed by (external_id, source).

        The whole batch goes out as one request, which PostgREST executes as
        a single INSERT ... ON CONFLICT DO UPDATE statement.

        Args:
            rows: Serialized CanonicalOpportunity rows.

        Returns:
            The written rows.
        """
        if not rows:
            return []
        response = (
            self._client.table(OPPORTUNITIES_TABLE)
            .upsert(rows, on_conflict=CONFLICT_KEY)
            .execute()
        )
        logger.info("Upserted %d opportunities", len(response.data or []))
        return response.data or []

    def get_opportunities_by_source(self, source: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Fetch the most recently updated opportunities from one provider.

        Args:
            source: Provider key (e.g., 'sam_gov').
            limit: Maximum rows returned.

        Returns:
            Rows ordered by last_updated, newest first.
        """
        response = (
            self._client.table(OPPORTUNITIES_TABLE)
            .select("*")
            .eq("source", source)
            .order("last_updated", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    def get_recent_opportunities(self, since: datetime, limit: int = 100) -> List[Dict[str, Any]]:
        response = (
            self._client.table(OPPORTUNITIES_TABLE)
            .select("*")
            .gte("last_updated", since.isoformat())
            .order("last_updated", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    # ------------------------------------------------------------------
    # Provider usage (daily quotas)
    # ------------------------------------------------------------------

    def get_daily_usage(self, provider: str, day: date) -> int:
        """Requests recorded for a provider on a UTC day (0 when no row exists)."""
        response = (
            self._client.table(USAGE_TABLE)
            .select("request_count")
            .eq("provider", provider)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return int(rows[0]["request_count"]) if rows else 0

    def increment_daily_usage(self, provider: str, day: date, limit: Optional[int]) -> Optional[int]:
        """Atomically add one request to the day's count if under limit.

        Calls the increment_provider_usage database function, which does the
        check and the increment in one statement.

        Args:
            provider: Provider key.
            day: UTC day the request counts against.
            limit: Daily cap, or None for uncapped providers.

        Returns:
            The count after incrementing, or None when the cap was already reached.
        """
        response = self._client.rpc(
            "increment_provider_usage",
            {"p_provider": provider, "p_date": day.isoformat(), "p_limit": limit},
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        return int(data) if data is not None else None

    # ------------------------------------------------------------------
    # Strategy inputs
    # ------------------------------------------------------------------

    def get_user_profiles(self) -> List[UserProfile]:
        response = self._client.table("user_profiles").select("*").execute()
        return [UserProfile(**row) for row in response.data or []]

    def get_projects(self) -> List[Project]:
        response = self._client.table("projects").select("*").execute()
        return [Project(**row) for row in response.data or []]

    # ------------------------------------------------------------------
    # Run history
    # ------------------------------------------------------------------

    def save_sync_run(
        self,
        source: str,
        started_at: datetime,
        completed_at: datetime,
        records_fetched: int,
        records_imported: int,
        errors: Optional[List[str]] = None,
        status: str = "completed",
        automated: bool = False,
    ) -> Dict[str, Any]:
        """Persist sync run metadata.

        Args:
            source: Provider key.
            started_at: Run start timestamp.
            completed_at: Run completion timestamp.
            records_fetched: Unique records fetched from the provider.
            records_imported: Rows written to opportunities.
            errors: Per-configuration error messages (if any).
            status: Run status string (completed, quota_exceeded, failed).
            automated: Whether the scheduler triggered the run.

        Returns:
            The inserted row as a dict.
        """
        record = {
            "source": source,
            "started_at": started_at.isoformat(),
            "completed_at": completed_at.isoformat(),
            "records_fetched": records_fetched,
            "records_imported": records_imported,
            "errors": errors or [],
            "status": status,
            "automated": automated,
        }
        response = (
            self._client.table("sync_runs")
            .insert(record)
            .execute()
        )
        logger.info("Saved %s sync run: %d fetched, %d imported, status=%s",
                    source, records_fetched, records_imported, status)
        return response.data[0] if response.data else {}
