"""Supabase storage: client and batched opportunity persister."""

from .client import SupabaseClient
from .persister import Persister

__all__ = ["Persister", "SupabaseClient"]
