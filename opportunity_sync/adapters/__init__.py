"""Provider adapters for federal and foundation funding APIs."""

from .base import ADAPTER_TIMEOUT, BaseAdapter
from .candid import CandidAdapter
from .grants_gov import GrantsGovAdapter
from .nih import NihReporterAdapter
from .nsf import NsfAwardsAdapter
from .registry import UnknownProviderError, build_adapter
from .sam_gov import SamGovAdapter

__all__ = [
    "ADAPTER_TIMEOUT",
    "BaseAdapter",
    "CandidAdapter",
    "GrantsGovAdapter",
    "NihReporterAdapter",
    "NsfAwardsAdapter",
    "SamGovAdapter",
    "UnknownProviderError",
    "build_adapter",
]
