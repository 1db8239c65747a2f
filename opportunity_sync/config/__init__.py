"""Service configuration."""

from .config import ALL_PROVIDERS, Config, load_config, validate_config

__all__ = ["ALL_PROVIDERS", "Config", "load_config", "validate_config"]
