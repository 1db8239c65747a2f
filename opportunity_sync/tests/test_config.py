"""Tests for configuration validation."""

import os
from unittest.mock import patch

import pytest

from opportunity_sync.config.config import Config, validate_config


def _clean_env(**extra):
    env = {
        k: v for k, v in os.environ.items()
        if k not in ("SUPABASE_URL", "SUPABASE_KEY", "SAM_API_KEY", "CANDID_API_KEY",
                     "ENABLED_PROVIDERS", "MAX_BACKOFF_SECONDS", "BASE_DELAY_SECONDS")
    }
    env.update(extra)
    return env


class TestConfigValidation:
    """Test startup config validation."""

    VALID_ENV = {
        "SUPABASE_URL": "https://test.supabase.co",
        "SUPABASE_KEY": "test-key-123",
        "SAM_API_KEY": "test-sam-key",
        "POLLING_INTERVAL_MINUTES": "30",
        "SAM_DAILY_LIMIT": "8",
        "LOG_LEVEL": "DEBUG",
    }

    def test_valid_config_loads_successfully(self):
        """All required vars present → Config loads without error."""
        with patch.dict(os.environ, _clean_env(**self.VALID_ENV), clear=True):
            config = validate_config()

        assert config.supabase_url == "https://test.supabase.co"
        assert config.supabase_key == "test-key-123"
        assert config.sam_api_key == "test-sam-key"
        assert config.polling_interval_minutes == 30
        assert config.log_level == "DEBUG"
        assert config.daily_limit_for("sam_gov") == 8
        assert config.daily_limit_for("nih") is None

    def test_defaults(self):
        with patch.dict(os.environ, _clean_env(**self.VALID_ENV), clear=True):
            config = validate_config()

        assert config.base_delay_seconds == 1.0
        assert config.max_backoff_seconds == 30.0
        assert config.categorization_url is None
        assert config.enabled_providers == ["grants_gov", "sam_gov", "nih", "nsf", "candid"]
        assert config.sam_scheduled_max_searches == 1

    def test_missing_required_var_raises_error(self):
        """Missing required vars → ValueError naming them all."""
        with patch.dict(os.environ, _clean_env(SAM_API_KEY="x"), clear=True):
            with pytest.raises(ValueError) as exc_info:
                validate_config()

        err_msg = str(exc_info.value)
        assert "SUPABASE_URL" in err_msg
        assert "SUPABASE_KEY" in err_msg

    def test_comma_separated_providers(self):
        env = _clean_env(ENABLED_PROVIDERS="grants_gov, nih", **self.VALID_ENV)
        with patch.dict(os.environ, env, clear=True):
            config = validate_config()

        assert config.enabled_providers == ["grants_gov", "nih"]

    def test_json_list_providers(self):
        env = _clean_env(ENABLED_PROVIDERS='["nsf"]', **self.VALID_ENV)
        with patch.dict(os.environ, env, clear=True):
            assert validate_config().enabled_providers == ["nsf"]

    def test_unknown_provider_rejected(self):
        env = _clean_env(ENABLED_PROVIDERS='["nsf", "sbir_gov"]', **self.VALID_ENV)
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(Exception, match="sbir_gov"):
                validate_config()

    def test_backoff_cap_below_base_rejected(self):
        with pytest.raises(Exception, match="max_backoff_seconds"):
            Config(supabase_url="u", supabase_key="k", base_delay_seconds=5, max_backoff_seconds=2)
