"""Shared Pydantic models - contract between strategy, adapters, orchestrator and store."""

from .canonical_opportunity import CanonicalOpportunity
from .external_record import ExternalRecord
from .profile import (
    Categories,
    Project,
    ProjectPairing,
    StrategyInsight,
    UserProfile,
    pair_projects,
)
from .search_configuration import SearchConfiguration, StrategyOrigin
from .sync_result import SyncReport, SyncRunResult, SyncSummary

__all__ = [
    "CanonicalOpportunity",
    "Categories",
    "ExternalRecord",
    "Project",
    "ProjectPairing",
    "SearchConfiguration",
    "StrategyInsight",
    "StrategyOrigin",
    "SyncReport",
    "SyncRunResult",
    "SyncSummary",
    "UserProfile",
    "pair_projects",
]
