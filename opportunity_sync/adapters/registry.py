"""Provider key -> adapter construction."""

from ..config import ALL_PROVIDERS, Config
from .base import BaseAdapter
from .candid import CandidAdapter
from .grants_gov import GrantsGovAdapter
from .nih import NihReporterAdapter
from .nsf import NsfAwardsAdapter
from .sam_gov import SamGovAdapter


class UnknownProviderError(KeyError):
    """No adapter is registered under the requested provider key."""


def build_adapter(provider: str, config: Config) -> BaseAdapter:
    """Construct the adapter for a provider key.

    Raises:
        UnknownProviderError: provider is not one of ALL_PROVIDERS.
        ValueError: the provider needs an API key that is not configured.
    """
    if provider not in ALL_PROVIDERS:
        raise UnknownProviderError(provider)

    daily_limit = config.daily_limit_for(provider)
    if provider == "grants_gov":
        return GrantsGovAdapter(user_agent=config.user_agent, daily_limit=daily_limit)
    if provider == "sam_gov":
        if not config.sam_api_key:
            raise ValueError("SAM_API_KEY environment variable is required")
        return SamGovAdapter(config.sam_api_key, user_agent=config.user_agent, daily_limit=daily_limit)
    if provider == "nih":
        return NihReporterAdapter(user_agent=config.user_agent, daily_limit=daily_limit)
    if provider == "nsf":
        return NsfAwardsAdapter(user_agent=config.user_agent, daily_limit=daily_limit)
    if not config.candid_api_key:
        raise ValueError("CANDID_API_KEY environment variable is required")
    return CandidAdapter(config.candid_api_key, user_agent=config.user_agent, daily_limit=daily_limit)
