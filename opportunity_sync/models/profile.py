"""User profile, project and oracle category models used for strategy generation."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Organization profile row from user_profiles."""

    model_config = ConfigDict(extra="ignore")

    id: str
    organization_type: Optional[str] = None
    industry: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    small_business: bool = False
    woman_owned: bool = False
    veteran_owned: bool = False
    minority_owned: bool = False


class Project(BaseModel):
    """Project row from projects."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    name: str = "Untitled Project"
    project_type: Optional[str] = None
    description: Optional[str] = None
    funding_needed: Optional[float] = None


class Categories(BaseModel):
    """Oracle answer: category family name -> values, plus free-form hints.

    Families differ per provider kind (subject_areas, departments,
    health_keywords, ...), so unknown keys are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    reasoning: Optional[str] = None

    def values(self, family: str) -> List[str]:
        """Return the string values of a family, ignoring blanks and non-lists."""
        raw = (self.model_extra or {}).get(family)
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            return []
        return [str(v).strip() for v in raw if v is not None and str(v).strip()]

    def hint(self, name: str) -> Any:
        return (self.model_extra or {}).get(name)

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProjectPairing(BaseModel):
    """A project together with the profile that owns it."""

    project: Project
    profile: UserProfile


def pair_projects(profiles: List[UserProfile], projects: List[Project]) -> List[ProjectPairing]:
    """Pair each project with the profile whose id equals the project's user_id.

    Projects without a matching profile are skipped. Order follows `projects`.
    """
    by_id: Dict[str, UserProfile] = {p.id: p for p in profiles}
    pairings = []
    for project in projects:
        profile = by_id.get(project.user_id)
        if profile is not None:
            pairings.append(ProjectPairing(project=project, profile=profile))
    return pairings


class StrategyInsight(BaseModel):
    """Per-project summary of what the oracle suggested, echoed in the report."""

    project_id: str
    project_name: str
    categories: Dict[str, Any] = Field(default_factory=dict)
