"""CanonicalOpportunity - provider-agnostic record stored in the opportunities table."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CanonicalOpportunity(BaseModel):
    """Normalized funding opportunity from any provider.

    Uniquely identified by (external_id, source); the store enforces this
    with a unique constraint and upserts conflict on it.
    """

    # Core identifiers
    external_id: str = Field(..., min_length=1, description="Provider-native unique id")
    source: str = Field(..., description="Provider key: grants_gov, sam_gov, nih, nsf, candid")

    # Opportunity details
    title: str = Field(..., min_length=1)
    sponsor: str = Field(..., min_length=1, description="Funding organization")
    agency: Optional[str] = Field(None, description="Sub-agency / institute / office")
    description: Optional[str] = None

    # Financial (None means unknown, never zero)
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None
    match_requirement_percentage: float = 0

    # Dates
    deadline_date: Optional[datetime] = None
    deadline_type: Literal["fixed", "rolling"] = "rolling"

    # Targeting
    eligibility_criteria: List[str] = Field(default_factory=list)
    geography: List[str] = Field(default_factory=lambda: ["nationwide"])
    project_types: List[str] = Field(default_factory=list)
    organization_types: List[str] = Field(default_factory=list)
    industry_focus: List[str] = Field(default_factory=list)
    minority_business: bool = False
    woman_owned_business: bool = False
    veteran_owned_business: bool = False
    small_business_only: bool = False

    # Application details
    cfda_number: Optional[str] = None
    contact_email: Optional[str] = None
    competition_level: str = "competitive"
    funding_instrument: str = "grant"
    required_documents: List[str] = Field(default_factory=list)

    # Provenance
    source_url: str
    raw_data: Dict[str, Any] = Field(default_factory=dict)
    classifier_metadata: Optional[Dict[str, Any]] = Field(
        None, description="Strategy origin of the search that found this record"
    )
    last_updated: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def amounts_ordered(self) -> "CanonicalOpportunity":
        if (
            self.amount_min is not None
            and self.amount_max is not None
            and self.amount_min > self.amount_max
        ):
            raise ValueError(
                f"amount_min ({self.amount_min}) exceeds amount_max ({self.amount_max})"
            )
        return self

    @property
    def key(self) -> tuple:
        return (self.external_id, self.source)

    def to_row(self) -> Dict[str, Any]:
        """Serialize for the opportunities table."""
        return self.model_dump(mode="json")
