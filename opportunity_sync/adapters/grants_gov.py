"""Grants.gov API adapter - POST /v1/api/search2."""

import logging
from datetime import date
from typing import Any, Dict, List

import httpx

from ..errors import ProviderRequestError
from ..models import ExternalRecord, SearchConfiguration
from .base import BaseAdapter, clean_params, parse_amount, parse_date

logger = logging.getLogger(__name__)


class GrantsGovAdapter(BaseAdapter):
    """Adapter for Grants.gov Search API v2.

    No authentication; requests carry a User-Agent attribution string per
    the Grants.gov terms of use. Pagination is rows/startRecordNum and the
    payload is wrapped in a "data" envelope.
    """

    API_URL = "https://api.grants.gov/v1/api/search2"
    unique_id_field = "id"
    page_size_param = "rows"
    max_page_size = 200
    default_title = "Untitled Grant Opportunity"

    @property
    def source_name(self) -> str:
        return "grants_gov"

    def default_params(self, today: date) -> Dict[str, Any]:
        # search2 has no posted-date filter; status restricts to live opportunities
        return {"oppStatuses": "posted", "startRecordNum": 0}

    def build_request(self, config: SearchConfiguration) -> httpx.Request:
        return httpx.Request(
            "POST",
            config.provider_endpoint,
            json=clean_params(dict(config.params)),
            headers={**self.headers(), "Content-Type": "application/json"},
        )

    def extract_items(self, body: Any) -> List[Dict[str, Any]]:
        if not isinstance(body, dict):
            return []
        errorcode = body.get("errorcode")
        if errorcode not in (None, 0, "0"):
            raise ProviderRequestError(
                self.source_name, f"errorcode={errorcode} msg={body.get('msg', '')}"
            )
        inner = body.get("data", body)
        if not isinstance(inner, dict):
            return []
        hit_count = inner.get("hitCount", 0)
        logger.debug(f"Grants.gov reported hitCount={hit_count}")
        return inner.get("oppHits") or []

    def map_record(self, record: ExternalRecord) -> Dict[str, Any]:
        data = record.payload
        source_id = str(data.get("id", "")).strip()
        title = data.get("title")
        sponsor = data.get("agencyName") or data.get("agencyCode") or data.get("agency") or "Federal Agency"
        deadline = parse_date(data.get("closeDate"), formats=("%m/%d/%Y",))
        aln = data.get("alnlist") or data.get("cfdaList") or []
        if isinstance(aln, str):
            aln = [aln]

        return {
            "title": title,
            "sponsor": sponsor,
            "agency": sponsor,
            "description": data.get("synopsis") or (f"Grant opportunity: {title}" if title else None),
            "amount_min": parse_amount(data.get("awardFloor")),
            "amount_max": parse_amount(data.get("awardCeiling")),
            "deadline_date": deadline,
            "eligibility_criteria": ["general"],
            "geography": None,
            "project_types": ["general"],
            "organization_types": ["nonprofit", "for_profit", "government"],
            "industry_focus": ["general"],
            "cfda_number": aln[0] if aln else None,
            "competition_level": "competitive",
            "funding_instrument": "grant",
            "required_documents": ["application_form"],
            "source_url": f"https://www.grants.gov/search-results-detail/{source_id}",
        }
