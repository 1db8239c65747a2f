"""Run-scoped deduplication of provider records."""

import logging
from typing import Callable, Hashable, Iterable, List, Set, TypeVar

from ..models import ExternalRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for each key, preserving input order."""
    seen: Set[Hashable] = set()
    unique = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


class Deduplicator:
    """Deduplicates records by the adapter's unique id within one run.

    The first record seen for an id wins, so its origin is the
    configuration that found it first. Lookups are O(1) via a set.
    """

    def __init__(self, key: Callable[[ExternalRecord], Hashable]):
        """Initialize deduplicator.

        Args:
            key: unique id of a record (normally adapter.unique_id_of)
        """
        self.key = key
        self.seen: Set[Hashable] = set()
        self.records: List[ExternalRecord] = []

    def add_batch(self, records: Iterable[ExternalRecord]) -> List[ExternalRecord]:
        """Accept the records not seen before in this run.

        Args:
            records: one configuration's parsed records

        Returns:
            The newly accepted records, in input order
        """
        new_records = []
        duplicate_count = 0
        for record in records:
            k = self.key(record)
            if k in self.seen:
                duplicate_count += 1
                continue
            self.seen.add(k)
            new_records.append(record)

        self.records.extend(new_records)
        logger.debug(f"Deduplication: {len(new_records)} new, {duplicate_count} duplicates")
        return new_records

    def __len__(self) -> int:
        return len(self.records)
