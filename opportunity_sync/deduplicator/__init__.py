"""Run-scoped record deduplication."""

from .dedup import Deduplicator, dedupe

__all__ = ["Deduplicator", "dedupe"]
