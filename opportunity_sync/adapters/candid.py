"""Candid foundation grants adapter - GET /v1/grants (bearer auth)."""

from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from ..models import ExternalRecord, SearchConfiguration
from .base import BaseAdapter, clean_params, lower_state, parse_amount, years_ago


class CandidAdapter(BaseAdapter):
    """Adapter for the Candid (Foundation Directory) grants API.

    Awards are historical, so there is no deadline. Award totals are
    mandatory: a record without an amount is not worth storing.
    """

    API_URL = "https://api.candid.org/v1/grants"
    unique_id_field = "id"
    page_size_param = "limit"
    max_page_size = 200
    auth_scheme = "bearer"
    default_title = "Foundation Grant Opportunity"
    requires_amount = True

    def __init__(self, api_key: str, user_agent: str = "Opportunity-Sync/1.0", daily_limit: Optional[int] = None):
        super().__init__(user_agent=user_agent, daily_limit=daily_limit)
        self.api_key = api_key

    @property
    def source_name(self) -> str:
        return "candid"

    def default_params(self, today: date) -> Dict[str, Any]:
        return {"award_date_from": years_ago(today, 2).isoformat(), "offset": 0}

    def headers(self) -> Dict[str, str]:
        return {**super().headers(), "Authorization": f"Bearer {self.api_key}"}

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        # list values (subject, population_served, funder_type) repeat the key
        return httpx.Request(
            "GET", config.provider_endpoint, params=clean_params(dict(config.params)), headers=self.headers()
        )

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        return body.get("data") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        grant_id = str(data.get("id", "")).strip()
        funder = data.get("funder")
        if not isinstance(funder, dict):
            funder = {}
        funder_name = funder.get("name")
        subjects = data.get("subject") or ["general"]
        if isinstance(subjects, str):
            subjects = [subjects]
        amount = parse_amount(data.get("amount"))

        return {
            "title": data.get("title"),
            "sponsor": funder_name,
            "agency": funder_name,
            "description": data.get("description")
            or data.get("purpose")
            or (f"Grant from {funder_name}" if funder_name else None),
            "amount_min": amount,
            "amount_max": amount,
            "deadline_date": None,
            "eligibility_criteria": ["nonprofit"],
            "geography": lower_state(funder.get("state")),
            "project_types": list(subjects),
            "organization_types": ["nonprofit"],
            "industry_focus": list(subjects),
            "competition_level": "competitive",
            "funding_instrument": "grant",
            "required_documents": ["grant_proposal", "budget", "organizational_documents"],
            "source_url": f"https://candid.org/grants/{grant_id}",
        }
