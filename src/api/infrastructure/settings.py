"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        TENANTGATE_DB_HOST: Database host (default: localhost)
        TENANTGATE_DB_PORT: Database port (default: 5432)
        TENANTGATE_DB_DATABASE: Database name (default: tenantgate)
        TENANTGATE_DB_USERNAME: Database user (default: tenantgate)
        TENANTGATE_DB_PASSWORD: Database password (required in production)
        TENANTGATE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        TENANTGATE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="tenantgate", description="Database name")
    username: str = Field(default="tenantgate", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        TENANTGATE_TENANCY_DEPLOYMENT_MODE: 'single' resolves the tenant from the
            Host header in-process; 'split' expects the edge middleware to
            forward the candidate subdomain in x-tenant-subdomain (default: single)
        TENANTGATE_TENANCY_LOOPBACK_HOSTS: Hosts that never carry a tenant
            (default: ["localhost", "127.0.0.1"])
        TENANTGATE_TENANCY_TRUST_FORWARDED_SUBDOMAIN: Keep an inbound
            x-tenant-subdomain header set by a trusted upstream proxy instead
            of stripping it (default: false)
        TENANTGATE_TENANCY_UNAUTHENTICATED_POLICY: What protected routes do for
            requests without a valid session: 'reject' (401), 'not_found' (404)
            or 'redirect' (303 to login_path) (default: reject)
        TENANTGATE_TENANCY_LOGIN_PATH: Redirect target for the 'redirect'
            policy (default: /login)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    deployment_mode: Literal["single", "split"] = Field(
        default="single",
        description="Where the subdomain-to-tenant lookup happens",
    )
    loopback_hosts: list[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Hosts treated as local development without a tenant",
    )
    trust_forwarded_subdomain: bool = Field(
        default=False,
        description="Keep x-tenant-subdomain set by a trusted upstream hop",
    )
    unauthenticated_policy: Literal["reject", "not_found", "redirect"] = Field(
        default="reject",
        description="Response policy for protected routes without a session",
    )
    login_path: str = Field(default="/login", description="Login page path")

    @field_validator("loopback_hosts")
    @classmethod
    def normalize_loopback_hosts(cls, value: list[str]) -> list[str]:
        """Compare loopback aliases case-insensitively."""
        return [host.strip().lower() for host in value if host.strip()]


class SessionSettings(BaseSettings):
    """Session credential settings.

    Environment variables:
        TENANTGATE_SESSION_LIFETIME_DAYS: Absolute session lifetime (default: 30)
        TENANTGATE_SESSION_COOKIE_NAME: Credential cookie name (default: session_token)
        TENANTGATE_SESSION_COOKIE_SECURE: Always mark the cookie Secure, e.g.
            behind a TLS-terminating proxy (default: false; requests served
            over https get Secure regardless)
        TENANTGATE_SESSION_SWEEP_INTERVAL_SECONDS: Interval of the background
            expired-session sweep, 0 disables it (default: 3600)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    lifetime_days: int = Field(
        default=30,
        description="Session lifetime in days",
        ge=1,
        le=365,
    )
    cookie_name: str = Field(
        default="session_token",
        description="Name of the session credential cookie",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Force the Secure cookie attribute",
    )
    sweep_interval_seconds: int = Field(
        default=3600,
        description="Seconds between expired-session sweeps (0 disables)",
        ge=0,
    )

    @property
    def max_age_seconds(self) -> int:
        """Cookie Max-Age matching the session lifetime."""
        return self.lifetime_days * 24 * 60 * 60


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenantgate API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()

    @property
    def session(self) -> SessionSettings:
        """Get session settings."""
        return get_session_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()


@lru_cache
def get_session_settings() -> SessionSettings:
    """Get cached session settings."""
    return SessionSettings()
