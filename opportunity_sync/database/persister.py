"""Batched upsert of canonical opportunities."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from ..errors import PersistenceError
from ..models import CanonicalOpportunity
from .client import SupabaseClient

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Persister:
    """Writes a run's opportunities in one upsert keyed by (external_id, source).

    Every write stamps last_updated with the current time, moved forward
    if needed so each stamp is strictly later than the previous one this
    persister issued. Existing rows are replaced in full.
    """

    def __init__(self, client: SupabaseClient, clock: Optional[Clock] = None):
        self.client = client
        self.clock = clock or _utcnow
        self._last_stamp: Optional[datetime] = None

    def _stamp(self) -> datetime:
        now = self.clock()
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return now

    def upsert(self, opportunities: List[CanonicalOpportunity]) -> int:
        """Upsert opportunities and return the number of rows written.

        Raises:
            PersistenceError: the store rejected the batch; nothing was written.
        """
        if not opportunities:
            return 0
        stamp = self._stamp()
        rows = [o.model_copy(update={"last_updated": stamp}).to_row() for o in opportunities]
        try:
            written = self.client.upsert_opportunities(rows)
        except Exception as e:
            logger.error(f"Upsert of {len(rows)} opportunities failed: {e}")
            raise PersistenceError(f"Failed to upsert {len(rows)} opportunities: {e}") from e
        return len(written)
