"""NSF Awards API adapter - GET /services/v1/awards.json."""

from datetime import date
from typing import Any, Dict, List

import httpx

from ..models import ExternalRecord, SearchConfiguration
from .base import BaseAdapter, clean_params, lower_state, parse_amount, years_ago

# Fields requested explicitly; the API returns a minimal set otherwise
PRINT_FIELDS = ",".join([
    "id", "title", "agency", "awardeeName", "awardeeCity", "awardeeStateCode",
    "date", "fundsObligatedAmt", "piFirstName", "piLastName", "piEmail",
    "abstractText", "startDate", "expDate", "fundProgramName",
])


class NsfAwardsAdapter(BaseAdapter):
    """Adapter for the NSF Award Search web API.

    Dates use YYYY/MM/DD (slash separated) and page size is "rpp"
    (records per page). The payload sits under response.award.
    """

    API_URL = "https://api.nsf.gov/services/v1/awards.json"
    unique_id_field = "id"
    page_size_param = "rpp"
    max_page_size = 200
    default_title = "NSF Research Award"

    @property
    def source_name(self) -> str:
        return "nsf"

    def default_params(self, today: date) -> Dict[str, Any]:
        return {
            "minAwardedDate": years_ago(today, 2).strftime("%Y/%m/%d"),
            "printFields": PRINT_FIELDS,
        }

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        return httpx.Request(
            "GET", config.provider_endpoint, params=clean_params(dict(config.params)), headers=self.headers()
        )

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        response = body.get("response") or {}
        if not isinstance(response, dict):
            return []
        return response.get("award") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        award_id = str(data.get("id", "")).strip()
        title = data.get("title")
        abstract = data.get("abstractText")

        description = None
        if title:
            description = f"NSF Award: {title}"
            if abstract:
                description = f"{description}\n\n{abstract}"

        amount = parse_amount(data.get("fundsObligatedAmt"))
        return {
            "title": title,
            "sponsor": "National Science Foundation",
            "agency": "NSF",
            "description": description,
            "amount_min": amount,
            "amount_max": amount,
            "deadline_date": None,
            "eligibility_criteria": ["university", "research_institution"],
            "geography": lower_state(data.get("awardeeStateCode")),
            "project_types": ["research", "development"],
            "organization_types": ["university", "nonprofit", "for_profit"],
            "industry_focus": ["research", "education"],
            "contact_email": data.get("piEmail"),
            "competition_level": "competitive",
            "funding_instrument": "grant",
            "required_documents": ["research_proposal", "budget", "cv"],
            "source_url": f"https://www.nsf.gov/awardsearch/showAward?AWD_ID={award_id}",
        }
