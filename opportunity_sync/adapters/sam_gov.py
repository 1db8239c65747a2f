"""SAM.gov API adapter - authenticated API access."""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from ..models import ExternalRecord, SearchConfiguration
from .base import BaseAdapter, clean_params, days_ago, lower_state, parse_amount, parse_date, strip_query_param

logger = logging.getLogger(__name__)

# Content pattern -> project types added when the title/description matches
PROJECT_TYPE_PATTERNS = [
    (r"technology|software|\bit\b|cyber|digital|data|cloud|artificial intelligence|\bai\b|machine learning",
     ["technology", "research"]),
    (r"construction|infrastructure|building|facility|renovation|repair|maintenance|engineering",
     ["infrastructure", "commercial_development"]),
    (r"health|medical|hospital|clinical|pharmaceutical|healthcare|patient", ["healthcare"]),
    (r"research|development|r&d|study|analysis|innovation|scientific|testing", ["research", "technology"]),
    (r"environment|green|sustainability|renewable|energy|conservation|climate", ["environmental"]),
    (r"education|training|learning|academic|university|school|curriculum", ["education"]),
    (r"community|social|development|outreach|public|citizen|municipal", ["community_development"]),
]


def infer_project_types(title: str, description: str) -> List[str]:
    """Project types implied by a contract's text; always includes contract/services."""
    content = f"{title} {description}"
    types = {"contract": None, "services": None}
    for pattern, added in PROJECT_TYPE_PATTERNS:
        if re.search(pattern, content, re.IGNORECASE):
            for t in added:
                types.setdefault(t, None)
    return list(types)


class SamGovAdapter(BaseAdapter):
    """Adapter for SAM.gov Opportunities API.

    API Docs: https://open.gsa.gov/api/opportunities-api/
    The API key travels as a query parameter and is redacted from every
    logged or reported URL. Non-federal keys are capped at a small daily
    request budget, tracked by the QuotaTracker.
    """

    API_URL = "https://api.sam.gov/prod/opportunities/v2/search"
    unique_id_field = "noticeId"
    page_size_param = "limit"
    max_page_size = 1000
    auth_scheme = "query-key"
    default_title = "Government Contract Opportunity"

    def __init__(self, api_key: str, user_agent: str = "Opportunity-Sync/1.0", daily_limit: Optional[int] = 10):
        """Initialize adapter.

        Args:
            api_key: SAM.gov API key (from env: SAM_API_KEY)
            user_agent: User-Agent header value
            daily_limit: requests allowed per UTC day
        """
        super().__init__(user_agent=user_agent, daily_limit=daily_limit)
        self.api_key = api_key

    @property
    def source_name(self) -> str:
        return "sam_gov"

    def default_params(self, today: date) -> Dict[str, Any]:
        """Last 30 days of solicitations (MM/DD/YYYY)."""
        return {
            "postedFrom": days_ago(today, 30).strftime("%m/%d/%Y"),
            "postedTo": today.strftime("%m/%d/%Y"),
            "ptype": "o",
            "offset": 0,
        }

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        params = clean_params({**config.params, "api_key": self.api_key})
        return httpx.Request("GET", config.provider_endpoint, params=params, headers=self.headers())

    def redact(self, url: str) -> str:
        return strip_query_param(url, "api_key")

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        logger.debug(f"SAM.gov reported totalRecords={body.get('totalRecords', 0)}")
        return body.get("opportunitiesData") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        notice_id = str(data.get("noticeId", "")).strip()
        title = data.get("title")
        description = data.get("description")

        full_path = data.get("fullParentPathName") or ""
        sponsor = data.get("department") or full_path.split(".")[0].strip() or data.get("organizationName")

        award = data.get("award") or {}
        award_amount = parse_amount(award.get("amount")) if isinstance(award, dict) else None

        contacts = data.get("pointOfContact") or []
        contact = contacts[0] if contacts and isinstance(contacts[0], dict) else {}

        set_aside = data.get("typeOfSetAside") or ""
        naics = data.get("naicsCode")
        office_address = data.get("officeAddress") or {}

        return {
            "title": title,
            "sponsor": sponsor,
            "agency": data.get("subTier") or data.get("office") or sponsor,
            "description": description or (f"Contract opportunity: {title}" if title else None),
            "amount_min": award_amount,
            "amount_max": award_amount,
            "deadline_date": parse_date(data.get("responseDeadLine"), formats=("%m/%d/%Y",)),
            "eligibility_criteria": data.get("organizationType") or ["for_profit"],
            "geography": lower_state(office_address.get("state") if isinstance(office_address, dict) else None),
            "project_types": infer_project_types(title or "", description or ""),
            "organization_types": ["for_profit", "nonprofit"],
            "industry_focus": [str(naics)] if naics else ["general"],
            "minority_business": "8A" in set_aside,
            "woman_owned_business": "WOSB" in set_aside,
            "veteran_owned_business": "VSA" in set_aside or "SDVOSBC" in set_aside,
            "small_business_only": "SBA" in set_aside,
            "contact_email": contact.get("email"),
            "competition_level": "set_aside" if set_aside else "competitive",
            "funding_instrument": "contract",
            "required_documents": ["technical_proposal", "price_proposal", "past_performance"],
            "source_url": f"https://sam.gov/opp/{notice_id}/view",
        }
