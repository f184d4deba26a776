"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    SessionSettings,
    TenancySettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        """Should allow max == min."""
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        """Pool min connections must be >= 1."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        """Pool max should not exceed reasonable limit."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)

    def test_connection_string_omits_password(self):
        """The loggable connection string never carries the password."""
        settings = DatabaseSettings(password="hunter2")
        assert "hunter2" not in settings.connection_string


class TestTenancySettings:
    """Tests for tenant resolution settings."""

    def test_defaults(self):
        """Single deployment, reject policy and the usual loopback aliases."""
        settings = TenancySettings()

        assert settings.deployment_mode == "single"
        assert settings.unauthenticated_policy == "reject"
        assert settings.trust_forwarded_subdomain is False
        assert settings.loopback_hosts == ["localhost", "127.0.0.1"]

    def test_loopback_hosts_are_normalized(self):
        """Loopback aliases are trimmed, lower-cased and blanks dropped."""
        settings = TenancySettings(loopback_hosts=[" LocalHost ", "", "Dev.Local"])

        assert settings.loopback_hosts == ["localhost", "dev.local"]

    def test_deployment_mode_from_environment(self, monkeypatch):
        """Deployment mode is read from the prefixed environment variable."""
        monkeypatch.setenv("TENANTGATE_TENANCY_DEPLOYMENT_MODE", "split")

        assert TenancySettings().deployment_mode == "split"

    @pytest.mark.parametrize("policy", ["reject", "not_found", "redirect"])
    def test_accepts_known_policies(self, policy):
        assert TenancySettings(unauthenticated_policy=policy).unauthenticated_policy == policy

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValidationError):
            TenancySettings(unauthenticated_policy="teapot")


class TestSessionSettings:
    """Tests for session credential settings."""

    def test_defaults(self):
        settings = SessionSettings()

        assert settings.lifetime_days == 30
        assert settings.cookie_name == "session_token"
        assert settings.cookie_secure is False

    def test_max_age_matches_lifetime(self):
        """Cookie Max-Age is the lifetime expressed in seconds."""
        assert SessionSettings(lifetime_days=30).max_age_seconds == 2_592_000
        assert SessionSettings(lifetime_days=1).max_age_seconds == 86_400

    def test_lifetime_must_be_positive(self):
        with pytest.raises(ValidationError):
            SessionSettings(lifetime_days=0)

    def test_sweeper_can_be_disabled(self):
        """An interval of zero disables the background sweep."""
        assert SessionSettings(sweep_interval_seconds=0).sweep_interval_seconds == 0

    def test_negative_sweep_interval_rejected(self):
        with pytest.raises(ValidationError):
            SessionSettings(sweep_interval_seconds=-1)
