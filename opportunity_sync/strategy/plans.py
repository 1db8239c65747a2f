"""Per-provider search plans: which category families become which queries."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..models import Categories, ProjectPairing
from .rules import (
    BucketBuilder,
    contract_buckets,
    foundation_buckets,
    grants_buckets,
    health_buckets,
    research_buckets,
)
from .tables import DEPARTMENT_MAPPINGS, VALID_SET_ASIDES

EMERGENCY_KIND = "emergency-fallback"
EMERGENCY_PAGE_SIZE = 200


@dataclass(frozen=True)
class QueryFamily:
    """One category family and how each of its values becomes a query.

    Attributes:
        family: oracle field (AI tier) or rule bucket name (rule tier)
        label: configuration name prefix, e.g. "AI-Subject"
        kind: strategy kind recorded on the configuration origin
        cap: max values taken from the family; None takes all
        page_size: requested page size (clamped to the adapter maximum)
        to_params: value -> provider query parameters
    """

    family: str
    label: str
    kind: str
    cap: Optional[int]
    page_size: int
    to_params: Callable[[str], Dict[str, Any]]

    def take(self, values: List[str]) -> List[str]:
        return values if self.cap is None else values[: self.cap]


# Extra AI queries that depend on the pairing, not just the categories
ExtraQueries = Callable[[ProjectPairing, Categories], List[tuple]]


@dataclass(frozen=True)
class ProviderPlan:
    oracle_kind: str
    ai_families: List[QueryFamily]
    rule_families: List[QueryFamily]
    rule_buckets: BucketBuilder
    emergency_name: str
    ai_extras: Optional[ExtraQueries] = field(default=None)


def _param(name: str) -> Callable[[str], Dict[str, Any]]:
    return lambda value: {name: value}


def _list_param(name: str) -> Callable[[str], Dict[str, Any]]:
    return lambda value: {name: [value]}


def _department(value: str) -> Dict[str, Any]:
    return {"organizationName": DEPARTMENT_MAPPINGS.get(value, value)}


def _set_aside(value: str) -> Dict[str, Any]:
    return {"typeOfSetAside": VALID_SET_ASIDES.get(value, value)}


def _text_search(fields: str) -> Callable[[str], Dict[str, Any]]:
    return lambda value: {"text_search": {"search_field": fields, "search_text": value}}


GRANTS_GOV_PLAN = ProviderPlan(
    oracle_kind="project_categories",
    ai_families=[
        QueryFamily("primary_categories", "AI-Primary", "ai-primary", 3, 50, _param("fundingCategories")),
        QueryFamily("priority_agencies", "AI-Agency", "ai-agency", 3, 30, _param("agencies")),
        QueryFamily("search_keywords", "AI-Keyword", "ai-keyword", 2, 25, _param("keyword")),
    ],
    rule_families=[
        QueryFamily("categories", "Fallback-Category", "fallback-category", None, 100, _param("fundingCategories")),
        QueryFamily("agencies", "Fallback-Agency", "fallback-agency", 5, 100, _param("agencies")),
        QueryFamily("keywords", "Fallback-Keyword", "fallback-keyword", 3, 50, _param("keyword")),
    ],
    rule_buckets=grants_buckets,
    emergency_name="Emergency Broad Search",
)

SAM_GOV_PLAN = ProviderPlan(
    oracle_kind="contracts",
    ai_families=[
        QueryFamily("departments", "AI-Department", "ai-department", 3, 50, _department),
        QueryFamily("set_asides", "AI-SetAside", "ai-set-aside", 2, 30, _set_aside),
        QueryFamily("naics_codes", "AI-NAICS", "ai-naics", 2, 25, _param("ncode")),
        QueryFamily("contract_keywords", "AI-Keyword", "ai-keyword", 2, 20, _param("title")),
    ],
    rule_families=[
        QueryFamily("departments", "Fallback-Department", "fallback-department", 3, 100, _department),
        QueryFamily("set_asides", "Fallback-SetAside", "fallback-set-aside", 2, 60, _set_aside),
        QueryFamily("keywords", "Fallback-Keyword", "fallback-keyword", 3, 40, _param("title")),
    ],
    rule_buckets=contract_buckets,
    emergency_name="Emergency Contract Search",
)

NIH_PLAN = ProviderPlan(
    oracle_kind="health",
    ai_families=[
        QueryFamily("health_keywords", "AI-Health", "ai-health", 3, 50, _text_search("projecttitle,terms,abstracttext")),
        QueryFamily("nih_institutes", "AI-Institute", "ai-institute", 2, 30, _list_param("agencies")),
        QueryFamily("research_methods", "AI-Method", "ai-method", 2, 25, _text_search("abstracttext,terms")),
    ],
    rule_families=[
        QueryFamily("keywords", "Fallback-Health", "fallback-health", 5, 100, _text_search("projecttitle,terms,abstracttext")),
        QueryFamily("institutes", "Fallback-Institute", "fallback-institute", 3, 80, _list_param("agencies")),
    ],
    rule_buckets=health_buckets,
    emergency_name="Emergency Health Search",
)

NSF_PLAN = ProviderPlan(
    oracle_kind="research",
    ai_families=[
        QueryFamily("research_keywords", "AI-Research", "ai-research", 3, 50, _param("keyword")),
        QueryFamily("collaboration_keywords", "AI-Collaboration", "ai-collaboration", 2, 30, _param("keyword")),
    ],
    rule_families=[
        QueryFamily("keywords", "Fallback-Research", "fallback-research", 5, 100, _param("keyword")),
        QueryFamily("states", "Fallback-State", "fallback-state", 3, 50, _param("awardeeStateCode")),
    ],
    rule_buckets=research_buckets,
    emergency_name="Emergency Research Search",
)

CANDID_GEOGRAPHIC = QueryFamily("state", "AI-Geographic", "ai-geographic", 1, 40, _param("funder_state"))


def _candid_geographic(pairing: ProjectPairing, categories: Categories) -> List[tuple]:
    """Local-funder query when the profile has a state and the focus is local."""
    focus = categories.hint("geographic_focus")
    if isinstance(focus, str):
        focus = [focus]
    if pairing.profile.state and isinstance(focus, list) and "local" in focus:
        return [(CANDID_GEOGRAPHIC, pairing.profile.state)]
    return []


CANDID_PLAN = ProviderPlan(
    oracle_kind="foundations",
    ai_families=[
        QueryFamily("subject_areas", "AI-Subject", "ai-subject", 3, 50, _list_param("subject")),
        QueryFamily("populations_served", "AI-Population", "ai-population", 2, 30, _list_param("population_served")),
        QueryFamily("support_types", "AI-Support", "ai-support", 2, 25, _param("support_type")),
    ],
    rule_families=[
        QueryFamily("subjects", "Fallback-Subject", "fallback-subject", 5, 100, _list_param("subject")),
        QueryFamily("populations", "Fallback-Population", "fallback-population", 3, 60, _list_param("population_served")),
        QueryFamily("funder_types", "Fallback-FunderType", "fallback-funder-type", 2, 80, _list_param("funder_type")),
    ],
    rule_buckets=foundation_buckets,
    emergency_name="Emergency Foundation Search",
    ai_extras=_candid_geographic,
)

PLANS: Dict[str, ProviderPlan] = {
    "grants_gov": GRANTS_GOV_PLAN,
    "sam_gov": SAM_GOV_PLAN,
    "nih": NIH_PLAN,
    "nsf": NSF_PLAN,
    "candid": CANDID_PLAN,
}
