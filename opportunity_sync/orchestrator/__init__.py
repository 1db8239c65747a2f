"""Sync run orchestration."""

from .sync import SyncOrchestrator, SyncState

__all__ = ["SyncOrchestrator", "SyncState"]
