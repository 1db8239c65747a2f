"""Tests for search strategy generation (AI, rule-based and emergency tiers)."""

import pytest

from helpers import TODAY
from opportunity_sync.adapters import CandidAdapter, GrantsGovAdapter, NihReporterAdapter
from opportunity_sync.models import Categories, Project, UserProfile, pair_projects
from opportunity_sync.strategy import CategorizationOracle, StrategyGenerator
from opportunity_sync.strategy.rules import (
    Buckets,
    grants_buckets,
    health_buckets,
    mentions,
    merge_rule_buckets,
)


class FakeOracle(CategorizationOracle):
    """Answers from a project-id -> categories map; records every call."""

    def __init__(self, answers=None, error=None):
        self.answers = answers or {}
        self.error = error
        self.calls = []

    async def classify(self, kind, prompt, project, profile):
        self.calls.append((kind, prompt, project.id))
        if self.error is not None:
            raise self.error
        answer = self.answers.get(project.id)
        return Categories(**answer) if answer is not None else None


async def _generate(adapter, oracle=None, profiles=(), projects=()):
    profiles, projects = list(profiles), list(projects)
    generator = StrategyGenerator(oracle)
    return await generator.generate(adapter, pair_projects(profiles, projects), profiles, projects, TODAY)


# ---------------------------------------------------------------------------
# AI tier
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ai_subject_configurations(nonprofit_profile, clinic_project):
    oracle = FakeOracle({
        "proj-1": {
            "subject_areas": ["health", "education", "youth", "arts"],
            "populations_served": ["low_income"],
            "geographic_focus": ["local"],
            "reasoning": "community clinic",
        }
    })
    adapter = CandidAdapter(api_key="k")

    configs, insights = await _generate(adapter, oracle, [nonprofit_profile], [clinic_project])

    assert [c.name for c in configs] == [
        "AI-Subject: health for Clinic Expansion",
        "AI-Subject: education for Clinic Expansion",
        "AI-Subject: youth for Clinic Expansion",
        "AI-Population: low_income for Clinic Expansion",
        "AI-Geographic: CA for Clinic Expansion",
    ]
    first = configs[0]
    assert first.params == {"award_date_from": "2023-03-14", "offset": 0, "subject": ["health"], "limit": 50}
    assert first.provider_endpoint == CandidAdapter.API_URL
    assert first.origin.strategy_kind == "ai-subject"
    assert first.origin.related_project_id == "proj-1"
    assert first.origin.target_category == "health"
    assert configs[-1].params["funder_state"] == "CA"
    assert configs[-1].origin.strategy_kind == "ai-geographic"

    assert len(insights) == 1
    assert insights[0].project_name == "Clinic Expansion"
    assert insights[0].categories["reasoning"] == "community clinic"


@pytest.mark.asyncio
async def test_oracle_called_once_per_pairing_with_kind_prompt(nonprofit_profile, clinic_project):
    second = clinic_project.model_copy(update={"id": "proj-2", "name": "Mobile Unit"})
    orphan = clinic_project.model_copy(update={"id": "proj-3", "user_id": "nobody"})
    oracle = FakeOracle()

    await _generate(CandidAdapter(api_key="k"), oracle, [nonprofit_profile], [clinic_project, second, orphan])

    assert [(kind, pid) for kind, _, pid in oracle.calls] == [("foundations", "proj-1"), ("foundations", "proj-2")]
    assert "Clinic Expansion" in oracle.calls[0][1]


@pytest.mark.asyncio
async def test_ai_family_caps():
    profile = UserProfile(id="u")
    project = Project(id="p", user_id="u", name="Lab")
    oracle = FakeOracle({"p": {
        "primary_categories": ["HL", "ED", "ST", "CD", "EN"],
        "priority_agencies": ["HHS"],
        "search_keywords": ["a", "b", "c"],
    }})

    configs, _ = await _generate(GrantsGovAdapter(), oracle, [profile], [project])

    kinds = [c.origin.strategy_kind for c in configs]
    assert kinds == ["ai-primary"] * 3 + ["ai-agency"] + ["ai-keyword"] * 2
    assert configs[0].params["fundingCategories"] == "HL"
    assert configs[0].params["rows"] == 50


@pytest.mark.asyncio
async def test_few_ai_configurations_add_rule_tier(nonprofit_profile, clinic_project):
    oracle = FakeOracle({"proj-1": {"subject_areas": ["health"]}})

    configs, insights = await _generate(CandidAdapter(api_key="k"), oracle, [nonprofit_profile], [clinic_project])

    assert len(insights) == 1
    assert configs[0].origin.strategy_kind == "ai-subject"
    rule_kinds = {c.origin.strategy_kind for c in configs[1:]}
    assert rule_kinds == {"fallback-subject", "fallback-population", "fallback-funder-type"}
    assert all(c.origin.related_project_id is None for c in configs[1:])


@pytest.mark.asyncio
async def test_oracle_failure_falls_back_to_rules(nonprofit_profile, clinic_project):
    oracle = FakeOracle(error=RuntimeError("categorizer down"))

    configs, insights = await _generate(GrantsGovAdapter(), oracle, [nonprofit_profile], [clinic_project])

    assert insights == []
    assert configs
    assert all(c.origin.strategy_kind.startswith("fallback-") for c in configs)


# ---------------------------------------------------------------------------
# Rule-based tier
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_rule_tier_without_oracle(nonprofit_profile, clinic_project):
    configs, insights = await _generate(GrantsGovAdapter(), None, [nonprofit_profile], [clinic_project])

    assert insights == []
    assert [c.name for c in configs] == [
        "Fallback-Category: HL",
        "Fallback-Category: ED",
        "Fallback-Category: HU",
        "Fallback-Agency: HHS",
        "Fallback-Agency: ED",
        "Fallback-Agency: CDC",
        "Fallback-Keyword: community development",
        "Fallback-Keyword: social services",
        "Fallback-Keyword: health",
    ]
    assert configs[0].params == {"oppStatuses": "posted", "startRecordNum": 0, "fundingCategories": "HL", "rows": 100}


@pytest.mark.asyncio
async def test_generation_is_deterministic(nonprofit_profile, clinic_project):
    adapter = NihReporterAdapter()
    first = await _generate(adapter, None, [nonprofit_profile], [clinic_project])
    second = await _generate(adapter, None, [nonprofit_profile], [clinic_project])
    assert first == second


class SmallPageGrantsAdapter(GrantsGovAdapter):
    max_page_size = 20


@pytest.mark.asyncio
async def test_page_size_clamped_to_adapter_maximum(nonprofit_profile):
    configs, _ = await _generate(SmallPageGrantsAdapter(), None, [nonprofit_profile])
    assert {c.params["rows"] for c in configs} == {20}

    configs, _ = await _generate(SmallPageGrantsAdapter())
    assert configs[0].params["rows"] == 20


# ---------------------------------------------------------------------------
# Emergency tier
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_emergency_when_nothing_else():
    configs, insights = await _generate(GrantsGovAdapter())

    assert insights == []
    assert len(configs) == 1
    emergency = configs[0]
    assert emergency.name == "Emergency Broad Search"
    assert emergency.origin.strategy_kind == "emergency-fallback"
    assert emergency.params == {"oppStatuses": "posted", "startRecordNum": 0, "rows": 200}


@pytest.mark.asyncio
async def test_emergency_uses_provider_recency_window():
    configs, _ = await _generate(NihReporterAdapter())
    assert configs[0].name == "Emergency Health Search"
    assert configs[0].params == {"fiscal_years": [2025, 2024, 2023], "offset": 0, "limit": 200}


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def test_mentions_matches_whole_words():
    assert mentions("Applying AI to triage", "AI")
    assert not mentions("He said so", "AI")
    assert mentions("early CANCER screening", "cancer")
    assert not mentions(None, "cancer")


def test_health_buckets_read_project_descriptions(nonprofit_profile, clinic_project):
    buckets = health_buckets(nonprofit_profile, [clinic_project])

    keywords = buckets.get("keywords")
    assert keywords[:5] == ["health", "medical", "clinical", "patient care", "public health"]
    assert {"cancer", "mental health", "treatment"} <= set(keywords)
    assert buckets.get("institutes") == ["AHRQ", "NLM"]


def test_defaults_fill_empty_buckets_only():
    buckets = grants_buckets(UserProfile(id="u"), [])
    assert buckets.get("categories") == ["HL", "CD"]
    assert buckets.get("keywords") == []


def test_rule_buckets_only_use_owned_projects():
    profile = UserProfile(id="u")
    foreign = Project(id="p", user_id="someone-else", project_type="agriculture")

    merged = merge_rule_buckets(grants_buckets, [profile], [foreign])

    assert "farming" not in merged.get("keywords")
    assert merged.get("categories") == ["HL", "CD"]


def test_buckets_keep_first_seen_order():
    buckets = Buckets()
    buckets.add("k", ["b", "a", "b"])
    buckets.add("k", ["c", "a"])
    assert buckets.get("k") == ["b", "a", "c"]
    assert not Buckets()
