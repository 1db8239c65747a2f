"""Unit tests for run-scoped deduplication."""

from helpers import StubAdapter, make_record
from opportunity_sync.deduplicator import Deduplicator, dedupe
from opportunity_sync.models import ExternalRecord, StrategyOrigin

ADAPTER = StubAdapter()


def _records(*ids, kind="fallback-keyword"):
    origin = StrategyOrigin(strategy_kind=kind)
    return [ExternalRecord(provider="stub", payload=make_record(i), origin=origin) for i in ids]


def test_first_seen_wins_across_batches():
    deduplicator = Deduplicator(ADAPTER.unique_id_of)

    first = deduplicator.add_batch(_records("A", "B", kind="ai-subject"))
    second = deduplicator.add_batch(_records("B", "C", kind="fallback-subject"))

    assert [r.payload["id"] for r in first] == ["A", "B"]
    assert [r.payload["id"] for r in second] == ["C"]
    assert len(deduplicator) == 3
    kept_b = deduplicator.records[1]
    assert kept_b.origin.strategy_kind == "ai-subject"


def test_duplicates_within_one_batch():
    deduplicator = Deduplicator(ADAPTER.unique_id_of)
    new = deduplicator.add_batch(_records("A", "A", "B"))
    assert [r.payload["id"] for r in new] == ["A", "B"]


def test_id_whitespace_is_ignored():
    deduplicator = Deduplicator(ADAPTER.unique_id_of)
    deduplicator.add_batch([ExternalRecord(provider="stub", payload=make_record("42"))])
    new = deduplicator.add_batch([ExternalRecord(provider="stub", payload=make_record(" 42 "))])
    assert new == []


def test_second_run_starts_empty():
    """A new Deduplicator (new run) does not remember the previous run's ids."""
    Deduplicator(ADAPTER.unique_id_of).add_batch(_records("A"))
    assert len(Deduplicator(ADAPTER.unique_id_of).add_batch(_records("A"))) == 1


def test_dedupe_preserves_order():
    assert dedupe([3, 1, 3, 2, 1], key=lambda x: x) == [3, 1, 2]
    assert dedupe([], key=lambda x: x) == []
