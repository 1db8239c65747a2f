"""Pytest configuration and fixtures."""

import pytest

from helpers import InMemoryStore, StubAdapter
from opportunity_sync.config import Config
from opportunity_sync.models import Project, UserProfile


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def stub_adapter():
    return StubAdapter()


@pytest.fixture
def sleeps():
    """Records every delay the code under test asks to sleep for."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)
    return _sleep


@pytest.fixture
def app_config():
    return Config(
        supabase_url="https://test.supabase.co",
        supabase_key="test-key",
        sam_api_key="test-sam-key",
        candid_api_key="test-candid-key",
    )


@pytest.fixture
def nonprofit_profile():
    return UserProfile(id="user-1", organization_type="nonprofit", industry="healthcare", state="CA")


@pytest.fixture
def clinic_project():
    return Project(
        id="proj-1",
        user_id="user-1",
        name="Clinic Expansion",
        project_type="healthcare",
        description="Expanding cancer treatment and mental health services",
        funding_needed=250_000,
    )


@pytest.fixture
def sample_grants_gov_response():
    """Sample Grants.gov search2 response."""
    return {
        "errorcode": 0,
        "msg": "Webservice Succeeds",
        "data": {
            "hitCount": 2,
            "oppHits": [
                {
                    "id": "335512",
                    "number": "HHS-2024-ACF-OCS-TE-0001",
                    "title": "Community Services Block Grant",
                    "agencyName": "Department of Health and Human Services",
                    "agencyCode": "HHS-ACF",
                    "openDate": "01/15/2025",
                    "closeDate": "03/18/2025",
                    "synopsis": "CSBG competitive grant program",
                    "awardCeiling": 500000,
                    "awardFloor": 100000,
                    "alnlist": ["93.569"],
                },
                {
                    "id": "335513",
                    "number": "NSF-25-001",
                    "title": "CSSI: Cyberinfrastructure for Sustained Scientific Innovation",
                    "agencyCode": "NSF",
                    "openDate": "02/01/2025",
                    "closeDate": "",
                },
            ],
        },
    }


@pytest.fixture
def sample_sam_gov_response():
    """Sample SAM.gov opportunities response."""
    return {
        "totalRecords": 1,
        "opportunitiesData": [
            {
                "noticeId": "abc123",
                "solicitationNumber": "W911NF-24-R-0001",
                "title": "Army Research Laboratory AI Software Research",
                "department": None,
                "fullParentPathName": "DEPT OF DEFENSE.DEPT OF THE ARMY.ARMY RESEARCH LAB",
                "subTier": "DEPT OF THE ARMY",
                "postedDate": "2025-02-15",
                "responseDeadLine": "2025-04-18T17:00:00-04:00",
                "naicsCode": "541715",
                "typeOfSetAside": "WOSB",
                "description": "Seeking machine learning research partners",
                "award": {"amount": "750000"},
                "pointOfContact": [{"email": "co@army.mil"}],
                "officeAddress": {"state": "MD"},
            }
        ],
    }


@pytest.fixture
def sample_nih_response():
    """Sample NIH RePORTER projects/search response."""
    return {
        "meta": {"total": 1},
        "results": [
            {
                "core_project_num": "R01CA123456",
                "project_title": "Precision Oncology Biomarkers",
                "abstract_text": "We study tumour biomarkers.",
                "award_amount": 412000,
                "agency_ic_admin": {"name": "National Cancer Institute"},
                "organization": {"org_state": "MA"},
                "principal_investigators": [{"email": "pi@example.edu"}],
                "funding_mechanism": "Research Grants",
            }
        ],
    }


@pytest.fixture
def sample_nsf_response():
    """Sample NSF awards.json response."""
    return {
        "response": {
            "award": [
                {
                    "id": "2401234",
                    "title": "CAREER: Robust Machine Learning",
                    "abstractText": "Robustness of learned models.",
                    "fundsObligatedAmt": "550000",
                    "awardeeStateCode": "TX",
                    "piEmail": "pi@utexas.edu",
                }
            ]
        }
    }


@pytest.fixture
def sample_candid_response():
    """Sample Candid grants response."""
    return {
        "data": [
            {
                "id": "G-1",
                "title": "Youth Literacy Program",
                "amount": 25000,
                "funder": {"name": "Example Community Foundation", "state": "OR"},
                "subject": ["education", "youth"],
                "purpose": "General operating support",
            },
            {
                "id": "G-2",
                "title": "Unfunded Inquiry",
                "funder": {"name": "Example Family Fund"},
            },
        ]
    }
