"""Tests for the batched opportunity upsert."""

from datetime import datetime, timedelta, timezone

import pytest

from helpers import InMemoryStore
from opportunity_sync.database import Persister
from opportunity_sync.errors import PersistenceError
from opportunity_sync.models import CanonicalOpportunity

FROZEN = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


def _parse(stamp: str) -> datetime:
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))


def _opportunity(external_id="SAM-1", title="Radar Maintenance"):
    return CanonicalOpportunity(
        external_id=external_id,
        source="sam_gov",
        title=title,
        sponsor="DEPT OF DEFENSE",
        source_url=f"https://sam.gov/opp/{external_id}/view",
    )


def test_upsert_is_idempotent_on_key():
    store = InMemoryStore()
    persister = Persister(store)

    assert persister.upsert([_opportunity(), _opportunity("SAM-2")]) == 2
    assert persister.upsert([_opportunity(title="Radar Maintenance (amended)")]) == 1

    assert len(store.rows) == 2
    assert store.rows[("SAM-1", "sam_gov")]["title"] == "Radar Maintenance (amended)"


def test_last_updated_strictly_increases_with_frozen_clock():
    store = InMemoryStore()
    persister = Persister(store, clock=lambda: FROZEN)

    persister.upsert([_opportunity()])
    first = store.rows[("SAM-1", "sam_gov")]["last_updated"]
    persister.upsert([_opportunity()])
    second = store.rows[("SAM-1", "sam_gov")]["last_updated"]

    assert _parse(second) == FROZEN + timedelta(microseconds=1)
    assert _parse(second) > _parse(first)


def test_empty_batch_skips_store():
    store = InMemoryStore()
    assert Persister(store).upsert([]) == 0
    assert store.upsert_calls == 0


def test_store_failure_raises_persistence_error():
    store = InMemoryStore(fail_upsert=True)

    with pytest.raises(PersistenceError, match="connection reset"):
        Persister(store).upsert([_opportunity()])

    assert store.rows == {}
