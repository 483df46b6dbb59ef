"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SENTRY_DSN",
    "TIMER_POLL_INTERVAL_SECONDS",
    "HISTORY_LOOKUP_LIMIT",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        """Default environment should be development."""
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.log_level == "INFO"

    def test_supabase_fields_default_to_none(self, clean_env):
        """Supabase fields should default to None."""
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None

    def test_session_defaults(self, clean_env):
        """Timer refresh is once per second, history scan is 50 rows."""
        settings = Settings(_env_file=None)
        assert settings.timer_poll_interval_seconds == 1.0
        assert settings.history_lookup_limit == 50

    def test_sentry_dsn_default_to_none(self, clean_env):
        """Sentry DSN should default to None."""
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        """Valid environment values should be accepted."""
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(environment=env, _env_file=None)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        """Environment validation should be case-insensitive."""
        settings = Settings(environment="PRODUCTION", _env_file=None)
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        """Invalid environment should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid", _env_file=None)
        assert "Invalid environment" in str(exc_info.value)

    def test_log_level_normalized(self):
        settings = Settings(log_level="debug", _env_file=None)
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="chatty", _env_file=None)
        assert "Invalid log level" in str(exc_info.value)

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(timer_poll_interval_seconds=0, _env_file=None)

    def test_history_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(history_lookup_limit=0, _env_file=None)


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        """supabase_key should prefer service role key over anon key."""
        settings = Settings(
            _env_file=None,
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        """supabase_key should fall back to anon key if no service role."""
        settings = Settings(
            _env_file=None,
            supabase_service_role_key=None,
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "anon-key"

    def test_supabase_key_returns_none_if_neither(self, clean_env):
        """supabase_key should return None if no keys set."""
        settings = Settings(_env_file=None)
        assert settings.supabase_key is None

    def test_is_production_property(self):
        """is_production should return True only in production."""
        prod_settings = Settings(environment="production", _env_file=None)
        dev_settings = Settings(environment="development", _env_file=None)
        assert prod_settings.is_production is True
        assert dev_settings.is_production is False

    def test_is_development_property(self):
        """is_development should return True only in development."""
        dev_settings = Settings(environment="development", _env_file=None)
        prod_settings = Settings(environment="production", _env_file=None)
        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_is_test_property(self):
        """is_test should return True only in test environment."""
        test_settings = Settings(environment="test", _env_file=None)
        dev_settings = Settings(environment="development", _env_file=None)
        assert test_settings.is_test is True
        assert dev_settings.is_test is False


@pytest.mark.unit
class TestGetSettings:
    """Test get_settings() function."""

    def test_get_settings_returns_settings_instance(self):
        """get_settings() should return a Settings instance."""
        # Clear cache to ensure fresh instance
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        """get_settings() should return the same cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test Settings loading from environment variables."""

    def test_settings_loads_from_env(self, monkeypatch):
        """Settings should load values from environment variables."""
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("HISTORY_LOOKUP_LIMIT", "20")
        monkeypatch.setenv("TIMER_POLL_INTERVAL_SECONDS", "0.5")

        settings = Settings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.supabase_url == "https://test.supabase.co"
        assert settings.history_lookup_limit == 20
        assert settings.timer_poll_interval_seconds == 0.5
