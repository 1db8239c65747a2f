"""ExternalRecord - a provider-shaped payload as returned by the provider API."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .search_configuration import StrategyOrigin


class ExternalRecord(BaseModel):
    """Opaque provider payload plus the origin of the search that found it.

    Only the adapter's unique-id field and the fields its field mapping reads
    are assumed to be present.
    """

    provider: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    origin: Optional[StrategyOrigin] = None
