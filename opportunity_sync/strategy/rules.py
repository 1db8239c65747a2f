"""Rule-based category buckets built from profiles and their projects.

Each provider has one bucket builder. Builders apply the lookup tables in
a fixed order (organization type, industry, projects, certifications) and
then fill any still-empty bucket from the provider defaults.
"""

import re
from typing import Callable, Dict, Iterable, List, Optional

from ..models import Project, UserProfile
from . import tables

CERTIFICATION_FLAGS = ("small_business", "minority_owned", "woman_owned", "veteran_owned")


class Buckets:
    """Named ordered sets of search terms (first-seen order, no repeats)."""

    def __init__(self):
        self._sets: Dict[str, Dict[str, None]] = {}

    def add(self, name: str, values: Iterable[str]) -> None:
        bucket = self._sets.setdefault(name, {})
        for value in values:
            bucket.setdefault(value, None)

    def apply(self, table: Dict[str, Dict[str, List[str]]], key: Optional[str]) -> None:
        """Add every bucket of table[key]; unknown or missing keys add nothing."""
        if not key:
            return
        for name, values in table.get(key.lower(), {}).items():
            self.add(name, values)

    def fill_defaults(self, defaults: Dict[str, List[str]]) -> None:
        for name, values in defaults.items():
            if not self._sets.get(name):
                self.add(name, values)

    def merge(self, other: "Buckets") -> None:
        for name, bucket in other._sets.items():
            self.add(name, bucket)

    def get(self, name: str) -> List[str]:
        return list(self._sets.get(name, {}))

    def __bool__(self) -> bool:
        return any(self._sets.values())


def mentions(text: Optional[str], term: str) -> bool:
    """Case-insensitive whole-word match of term in text."""
    if not text:
        return False
    return re.search(rf"\b{re.escape(term)}\b", text, re.IGNORECASE) is not None


def _apply_certifications(buckets: Buckets, table: Dict[str, Dict[str, List[str]]], profile: UserProfile) -> None:
    for flag in CERTIFICATION_FLAGS:
        if getattr(profile, flag):
            buckets.apply(table, flag)


def grants_buckets(profile: UserProfile, projects: List[Project]) -> Buckets:
    buckets = Buckets()
    buckets.apply(tables.GRANTS_ORG_TYPES, profile.organization_type)
    buckets.apply(tables.GRANTS_INDUSTRIES, profile.industry)
    for project in projects:
        buckets.apply(tables.GRANTS_PROJECT_TYPES, project.project_type)
        if project.funding_needed:
            if project.funding_needed >= 1_000_000:
                buckets.add("keywords", ["large scale"])
            elif project.funding_needed <= 50_000:
                buckets.add("keywords", ["small business"])
                buckets.add("agencies", ["SBA"])
    _apply_certifications(buckets, tables.GRANTS_CERTIFICATIONS, profile)
    buckets.fill_defaults(tables.GRANTS_DEFAULTS)
    return buckets


def contract_buckets(profile: UserProfile, projects: List[Project]) -> Buckets:
    buckets = Buckets()
    buckets.apply(tables.CONTRACT_ORG_TYPES, profile.organization_type)
    _apply_certifications(buckets, tables.CONTRACT_CERTIFICATIONS, profile)
    buckets.apply(tables.CONTRACT_INDUSTRIES, profile.industry)
    for project in projects:
        buckets.apply(tables.CONTRACT_PROJECT_TYPES, project.project_type)
    buckets.fill_defaults(tables.CONTRACT_DEFAULTS)
    return buckets


def health_buckets(profile: UserProfile, projects: List[Project]) -> Buckets:
    buckets = Buckets()
    buckets.apply(tables.HEALTH_ORG_TYPES, profile.organization_type)
    buckets.apply(tables.HEALTH_INDUSTRIES, profile.industry)
    for project in projects:
        buckets.add("keywords", [t for t in tables.HEALTH_DESCRIPTION_TERMS if mentions(project.description, t)])
        buckets.apply(tables.HEALTH_PROJECT_TYPES, project.project_type)
    buckets.fill_defaults(tables.HEALTH_DEFAULTS)
    return buckets


def research_buckets(profile: UserProfile, projects: List[Project]) -> Buckets:
    buckets = Buckets()
    buckets.apply(tables.RESEARCH_ORG_TYPES, profile.organization_type)
    buckets.apply(tables.RESEARCH_INDUSTRIES, profile.industry)
    if profile.state:
        buckets.add("states", [profile.state])
    for project in projects:
        buckets.add("keywords", [t for t in tables.RESEARCH_DESCRIPTION_TERMS if mentions(project.description, t)])
        if project.funding_needed:
            if project.funding_needed >= 500_000:
                buckets.add("keywords", ["large scale research"])
            elif project.funding_needed <= 100_000:
                buckets.add("keywords", ["early stage research"])
    buckets.fill_defaults(tables.RESEARCH_DEFAULTS)
    return buckets


def foundation_buckets(profile: UserProfile, projects: List[Project]) -> Buckets:
    buckets = Buckets()
    buckets.apply(tables.FOUNDATION_ORG_TYPES, profile.organization_type)
    buckets.apply(tables.FOUNDATION_INDUSTRIES, profile.industry)
    for project in projects:
        buckets.apply(tables.FOUNDATION_PROJECT_TYPES, project.project_type)
        if project.funding_needed:
            if project.funding_needed >= 100_000:
                buckets.add("funder_types", ["private_foundation"])
            else:
                buckets.add("funder_types", ["community_foundation", "corporate_foundation"])
    _apply_certifications(buckets, tables.FOUNDATION_CERTIFICATIONS, profile)
    buckets.fill_defaults(tables.FOUNDATION_DEFAULTS)
    return buckets


BucketBuilder = Callable[[UserProfile, List[Project]], Buckets]


def merge_rule_buckets(
    builder: BucketBuilder, profiles: List[UserProfile], projects: List[Project]
) -> Buckets:
    """Union of every profile's buckets, in profile order.

    Each profile is evaluated against only the projects it owns.
    """
    merged = Buckets()
    for profile in profiles:
        owned = [p for p in projects if p.user_id == profile.id]
        merged.merge(builder(profile, owned))
    return merged
