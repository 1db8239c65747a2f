"""Run outcome models: per-configuration results and the trigger report."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SyncRunResult(BaseModel):
    """Outcome of one configuration in a run (executed or skipped)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    config_name: str
    strategy_kind: str
    related_project_id: Optional[str] = None
    record_count: Optional[int] = None
    new_records: Optional[int] = None
    attempts: int = 0
    error: Optional[str] = None
    skipped: bool = False
    url: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and not self.skipped


class SyncSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_fetched: int = 0
    total_processed: int = 0
    total_valid: int = 0
    total_imported: int = 0
    strategies_used: int = 0
    total_search_configurations: int = 0
    source: str
    last_sync: datetime
    automated: bool = False


class SyncReport(BaseModel):
    """JSON body returned by the trigger endpoint for a completed run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    imported: int = 0
    message: str
    summary: SyncSummary
    search_results: List[SyncRunResult] = Field(default_factory=list)
    sample_records: List[Dict[str, Any]] = Field(default_factory=list)
    ai_insights: List[Dict[str, Any]] = Field(default_factory=list)
    daily_usage: Optional[int] = None
    daily_limit: Optional[int] = None

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
