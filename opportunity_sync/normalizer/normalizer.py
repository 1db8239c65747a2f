"""Provider record -> CanonicalOpportunity, with defaults and validation."""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..adapters.base import BaseAdapter
from ..models import CanonicalOpportunity, ExternalRecord

logger = logging.getLogger(__name__)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Normalizer:
    """Applies one adapter's field mapping and the shared defaults.

    Defaults: a missing title takes the adapter's generic label (when it
    has one), missing amounts stay None, a missing deadline means
    rolling, missing geography means nationwide. Records that still fail
    validation are dropped and logged at debug level.
    """

    def __init__(self, adapter: BaseAdapter):
        self.adapter = adapter
        self.dropped = 0

    def normalize(self, record: ExternalRecord) -> Optional[CanonicalOpportunity]:
        """Normalize one record; None if it cannot be mapped or fails validation."""
        source_id = self.adapter.unique_id_of(record)
        try:
            fields = self.adapter.map_record(record)
        except (AttributeError, TypeError, ValueError) as e:
            return self._drop(source_id, f"unmappable record: {type(e).__name__}: {e}")

        title = fields.get("title")
        if _blank(title):
            title = self.adapter.default_title
        if _blank(title) or _blank(fields.get("sponsor")):
            return self._drop(source_id, "missing title or sponsor")
        if self.adapter.requires_amount and fields.get("amount_min") is None:
            return self._drop(source_id, "missing award amount")

        deadline = fields.get("deadline_date")
        geography = fields.get("geography") or ["nationwide"]
        origin = record.origin

        values: Dict[str, Any] = {k: v for k, v in fields.items() if v is not None}
        values.update(
            external_id=source_id,
            source=self.adapter.source_name,
            title=str(title).strip(),
            deadline_date=deadline,
            deadline_type="fixed" if deadline else "rolling",
            geography=geography,
            raw_data=record.payload,
            classifier_metadata=origin.model_dump() if origin is not None else None,
        )
        try:
            return CanonicalOpportunity(**values)
        except ValidationError as e:
            return self._drop(source_id, str(e))

    def normalize_all(self, records: List[ExternalRecord]) -> List[CanonicalOpportunity]:
        valid = []
        for record in records:
            opportunity = self.normalize(record)
            if opportunity is not None:
                valid.append(opportunity)
        logger.info(
            f"Normalized {len(valid)} of {len(records)} {self.adapter.source_name} records "
            f"({len(records) - len(valid)} dropped)"
        )
        return valid

    def _drop(self, source_id: str, reason: str) -> None:
        self.dropped += 1
        logger.debug(f"Dropping {self.adapter.source_name}:{source_id}: {reason}")
        return None
