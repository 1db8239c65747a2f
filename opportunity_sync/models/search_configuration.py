"""SearchConfiguration - one parameterized query issued to a provider."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StrategyOrigin(BaseModel):
    """Which strategy tier produced a configuration, and for whom."""

    model_config = ConfigDict(frozen=True)

    strategy_kind: str = Field(..., description="e.g. ai-subject, fallback-keyword, emergency-fallback")
    related_project_id: Optional[str] = None
    target_category: Optional[str] = None

    @property
    def is_ai(self) -> bool:
        return self.strategy_kind.startswith("ai-")


class SearchConfiguration(BaseModel):
    """Immutable query description; consumed exactly once per run."""

    model_config = ConfigDict(frozen=True)

    name: str
    provider_endpoint: str
    params: Dict[str, Any] = Field(default_factory=dict)
    origin: StrategyOrigin
