"""Tests for the HTTP categorization oracle."""

import json

import httpx
import pytest
import respx

from opportunity_sync.strategy import HttpCategorizationOracle, NullOracle, build_oracle

ORACLE_URL = "https://app.example.test/api/ai/categorize"


@pytest.fixture
def oracle():
    return HttpCategorizationOracle(ORACLE_URL)


@pytest.mark.asyncio
@respx.mock
async def test_posts_kind_prompt_project_and_profile(oracle, nonprofit_profile, clinic_project):
    route = respx.post(ORACLE_URL).mock(
        return_value=httpx.Response(200, json={"subject_areas": ["health"], "reasoning": "clinic"})
    )

    categories = await oracle.classify("foundations", "PROMPT", clinic_project, nonprofit_profile)

    assert categories.values("subject_areas") == ["health"]
    assert categories.reasoning == "clinic"
    sent = json.loads(route.calls.last.request.content)
    assert sent["type"] == "foundations"
    assert sent["prompt"] == "PROMPT"
    assert sent["project"]["id"] == "proj-1"
    assert sent["userProfile"]["organization_type"] == "nonprofit"


@pytest.mark.asyncio
@respx.mock
async def test_data_envelope_is_unwrapped(oracle, nonprofit_profile, clinic_project):
    respx.post(ORACLE_URL).mock(
        return_value=httpx.Response(200, json={"data": {"health_keywords": ["oncology", " ", None]}})
    )

    categories = await oracle.classify("health", "p", clinic_project, nonprofit_profile)

    assert categories.values("health_keywords") == ["oncology"]


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, content=b"null"),
    httpx.Response(500, text="boom"),
    httpx.Response(200, content=b"<html>"),
    httpx.Response(200, json=["not", "an", "object"]),
])
@respx.mock
async def test_unusable_answers_are_none(oracle, nonprofit_profile, clinic_project, response):
    respx.post(ORACLE_URL).mock(return_value=response)
    assert await oracle.classify("research", "p", clinic_project, nonprofit_profile) is None


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_is_none(oracle, nonprofit_profile, clinic_project):
    respx.post(ORACLE_URL).mock(side_effect=httpx.ConnectError("refused"))
    assert await oracle.classify("contracts", "p", clinic_project, nonprofit_profile) is None


def test_build_oracle():
    assert isinstance(build_oracle(None), NullOracle)
    built = build_oracle(ORACLE_URL, 5.0)
    assert isinstance(built, HttpCategorizationOracle)
    assert built.url == ORACLE_URL
