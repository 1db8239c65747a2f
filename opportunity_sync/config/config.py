"""Configuration management for the opportunity sync service."""

import json
from typing import Annotated, Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


REQUIRED_VARS = [
    "SUPABASE_URL",
    "SUPABASE_KEY",
]

ALL_PROVIDERS = ["grants_gov", "sam_gov", "nih", "nsf", "candid"]


class Config(BaseSettings):
    """Application configuration from environment variables.

    Every setting the pipeline reads lives here; the service passes this
    object into adapters, quota tracking and the orchestrator explicitly.
    """

    # Required
    supabase_url: str
    supabase_key: str

    # Provider credentials (only needed when that provider is synced)
    sam_api_key: Optional[str] = None
    candid_api_key: Optional[str] = None
    user_agent: str = "Opportunity-Sync/1.0"

    # Categorization oracle; unset means the rule-based tier carries every run
    categorization_url: Optional[str] = None
    categorization_timeout_seconds: float = 20.0

    # Quotas and throttling
    sam_daily_limit: int = 10
    base_delay_seconds: float = 1.0
    max_backoff_seconds: float = 30.0
    request_timeout_seconds: float = 30.0

    # Scheduling
    # ENABLED_PROVIDERS accepts "nih,nsf" or a JSON list
    enabled_providers: Annotated[List[str], NoDecode] = list(ALL_PROVIDERS)
    polling_interval_minutes: int = 60
    sam_sync_hours: str = "7,9,11,13,15,17,19,21,23"
    sam_scheduled_max_searches: int = 1

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "case_sensitive": False}

    @field_validator("enabled_providers", mode="before")
    @classmethod
    def split_providers(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("enabled_providers")
    @classmethod
    def known_providers(cls, v: List[str]) -> List[str]:
        unknown = [p for p in v if p not in ALL_PROVIDERS]
        if unknown:
            raise ValueError(f"Unknown provider(s): {', '.join(unknown)}")
        return v

    @field_validator("max_backoff_seconds")
    @classmethod
    def cap_above_base(cls, v: float, info) -> float:
        base = info.data.get("base_delay_seconds", 1.0)
        if v < base:
            raise ValueError(f"max_backoff_seconds ({v}) must be >= base_delay_seconds ({base})")
        return v

    def daily_limit_for(self, provider: str) -> Optional[int]:
        """Daily request cap for a provider; None means unlimited."""
        if provider == "sam_gov":
            return self.sam_daily_limit
        return None


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with descriptive message listing ALL missing
    required variables (not just the first one).
    """
    try:
        return Config()  # type: ignore[call-arg]
    except Exception as exc:
        missing = []
        err_str = str(exc)
        for var in REQUIRED_VARS:
            if var.lower() in err_str.lower():
                missing.append(var)
        if missing:
            names = ", ".join(missing)
            raise ValueError(
                f"Missing required environment variable(s): {names}. "
                "Please set them in your .env file or environment."
            ) from exc
        raise


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()
