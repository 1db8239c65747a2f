"""Test doubles shared across test modules."""

from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from opportunity_sync.adapters.base import BaseAdapter, clean_params
from opportunity_sync.models import (
    ExternalRecord,
    Project,
    SearchConfiguration,
    StrategyOrigin,
    UserProfile,
)

TODAY = date(2025, 3, 14)
STUB_URL = "https://api.example.test/search"


class InMemoryStore:
    """Stand-in for SupabaseClient covering usage, opportunities, profiles and runs."""

    def __init__(self, usage: Optional[Dict[tuple, int]] = None, fail_upsert: bool = False):
        self.usage: Dict[tuple, int] = dict(usage or {})
        self.rows: Dict[tuple, Dict[str, Any]] = {}
        self.fail_upsert = fail_upsert
        self.upsert_calls = 0
        self.increment_calls = 0
        self.profiles: List[UserProfile] = []
        self.projects: List[Project] = []
        self.runs: List[Dict[str, Any]] = []

    def get_daily_usage(self, provider: str, day: date) -> int:
        return self.usage.get((provider, day), 0)

    def increment_daily_usage(self, provider: str, day: date, limit: Optional[int]) -> Optional[int]:
        self.increment_calls += 1
        count = self.usage.get((provider, day), 0)
        if limit is not None and count >= limit:
            return None
        self.usage[(provider, day)] = count + 1
        return count + 1

    def upsert_opportunities(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        self.upsert_calls += 1
        if self.fail_upsert:
            raise RuntimeError("connection reset by peer")
        for row in rows:
            self.rows[(row["external_id"], row["source"])] = row
        return rows

    def get_user_profiles(self) -> List[UserProfile]:
        return list(self.profiles)

    def get_projects(self) -> List[Project]:
        return list(self.projects)

    def save_sync_run(self, **kwargs) -> Dict[str, Any]:
        self.runs.append(kwargs)
        return kwargs


class StubAdapter(BaseAdapter):
    """Minimal GET adapter: items under "items", title required (no generic label)."""

    API_URL = STUB_URL
    unique_id_field = "id"

    @property
    def source_name(self) -> str:
        return "stub"

    def default_params(self, today: date) -> Dict[str, Any]:
        return {"since": today.isoformat()}

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        return httpx.Request(
            "GET", config.provider_endpoint, params=clean_params(dict(config.params)), headers=self.headers()
        )

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        return body.get("items") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        return {
            "title": data.get("title"),
            "sponsor": data.get("sponsor"),
            "amount_min": data.get("amount"),
            "amount_max": data.get("amount"),
            "source_url": f"https://example.test/{data.get('id')}",
        }


def make_config(name: str, kind: str = "fallback-keyword", project_id: Optional[str] = None,
                **params) -> SearchConfiguration:
    return SearchConfiguration(
        name=name,
        provider_endpoint=STUB_URL,
        params={"q": name, **params},
        origin=StrategyOrigin(strategy_kind=kind, related_project_id=project_id, target_category=name),
    )


def make_record(id: str, title: Optional[str] = "Grant", sponsor: Optional[str] = "Foundation",
                **extra) -> Dict[str, Any]:
    return {"id": id, "title": title, "sponsor": sponsor, **extra}


def items_by_query(pages: Dict[str, Any]):
    """respx side effect: answer by the "q" query param.

    A value that is an int is returned as that status code; a list is
    returned as the items envelope.
    """
    def _respond(request: httpx.Request) -> httpx.Response:
        answer = pages[request.url.params["q"]]
        if isinstance(answer, int):
            return httpx.Response(answer, text="upstream error")
        return httpx.Response(200, json={"items": answer})
    return _respond
