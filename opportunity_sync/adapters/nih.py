"""NIH RePORTER v2 adapter - POST /v2/projects/search."""

from datetime import date
from typing import Any, Dict, List

import httpx

from ..models import ExternalRecord, SearchConfiguration
from .base import BaseAdapter, clean_params, lower_state, parse_amount

# Keys sent at the top level of the request body; everything else is criteria
PAGING_KEYS = ("limit", "offset")


class NihReporterAdapter(BaseAdapter):
    """Adapter for the NIH RePORTER project search API.

    Results are historical awards, so records carry no deadline and are
    treated as rolling. Search configurations keep criteria flat in their
    params; the request body nests them under "criteria".
    """

    API_URL = "https://api.reporter.nih.gov/v2/projects/search"
    unique_id_field = "core_project_num"
    page_size_param = "limit"
    max_page_size = 500
    default_title = "NIH Research Project"

    @property
    def source_name(self) -> str:
        return "nih"

    def default_params(self, today: date) -> Dict[str, Any]:
        return {
            "fiscal_years": [today.year, today.year - 1, today.year - 2],
            "offset": 0,
        }

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        params = clean_params(dict(config.params))
        body: Dict[str, Any] = {k: params.pop(k) for k in PAGING_KEYS if k in params}
        body["criteria"] = params
        return httpx.Request(
            "POST",
            config.provider_endpoint,
            json=body,
            headers={**self.headers(), "Content-Type": "application/json"},
        )

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        return body.get("results") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        project_num = str(data.get("core_project_num", "")).strip()
        title = data.get("project_title")
        abstract = data.get("abstract_text")

        investigators = data.get("principal_investigators") or []
        pi = investigators[0] if investigators and isinstance(investigators[0], dict) else {}
        organization = data.get("organization")
        if not isinstance(organization, dict):
            organization = {}
        ic_admin = data.get("agency_ic_admin")
        if not isinstance(ic_admin, dict):
            ic_admin = {}

        description = None
        if title:
            description = f"NIH Project: {title}"
            if abstract:
                description = f"{description}\n\n{abstract}"

        award = parse_amount(data.get("award_amount"))
        return {
            "title": title,
            "sponsor": "National Institutes of Health",
            "agency": ic_admin.get("name") or "NIH",
            "description": description,
            "amount_min": award,
            "amount_max": award,
            "deadline_date": None,
            "eligibility_criteria": ["university", "research_institution", "healthcare"],
            "geography": lower_state(organization.get("org_state")),
            "project_types": ["research", "clinical", "biomedical"],
            "organization_types": ["university", "nonprofit", "healthcare", "for_profit"],
            "industry_focus": ["healthcare", "biomedical", "research"],
            "contact_email": pi.get("email"),
            "competition_level": "competitive",
            "funding_instrument": data.get("funding_mechanism") or "grant",
            "required_documents": ["research_proposal", "budget", "biographical_sketch"],
            "source_url": f"https://reporter.nih.gov/project-details/{project_num}",
        }
