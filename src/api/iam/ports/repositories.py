"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. The user, session and org settings repositories form the
tenant-scoped data access layer: every method takes ``tenant_id`` as its
first argument and threads it into the query predicate.

The session repository is the one place with credential-path methods that
are not tenant-filtered (lookup and delete by token, global expiry sweep).
The token itself is the credential there, and the tenant is checked by the
caller after the lookup.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from iam.domain.aggregates import OrgSettings, Session, Tenant, User
from iam.domain.value_objects import Subdomain, TenantId, UserId


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate lookup and provisioning.

    Tenants are not tenant-scoped themselves; they are looked up by their
    globally unique subdomain.
    """

    async def get_by_subdomain(self, subdomain: Subdomain) -> Tenant | None:
        """Retrieve a tenant by its subdomain.

        Args:
            subdomain: The normalized subdomain

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID."""
        ...

    async def save(self, tenant: Tenant) -> None:
        """Persist a new tenant.

        Raises:
            DuplicateSubdomainError: If the subdomain is already taken
        """
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Tenant-scoped repository for User aggregates."""

    async def create(self, tenant_id: TenantId, user: User) -> User:
        """Insert a user row owned by ``tenant_id``.

        The tenant id is written as part of the INSERT. A user aggregate
        carrying a different tenant id is rejected.

        Raises:
            DuplicateEmailError: If the email already exists in the tenant
            ValueError: If the aggregate belongs to another tenant
        """
        ...

    async def get_by_id(self, tenant_id: TenantId, user_id: UserId) -> User | None:
        """Retrieve a user by ID within a tenant."""
        ...

    async def get_by_email(self, tenant_id: TenantId, email: str) -> User | None:
        """Retrieve a user by normalized email within a tenant."""
        ...

    async def find(self, tenant_id: TenantId, **filters: Any) -> list[User]:
        """List users of a tenant matching equality filters.

        A ``tenant_id`` key in ``filters`` is always overridden.
        """
        ...

    async def count(self, tenant_id: TenantId) -> int:
        """Count the users of a tenant."""
        ...

    async def update(
        self,
        tenant_id: TenantId,
        user_id: UserId,
        *,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> int:
        """Update a user matched on (id, tenant_id).

        Returns:
            Number of rows affected (0 when the id belongs to another tenant)
        """
        ...

    async def delete(self, tenant_id: TenantId, user_id: UserId) -> int:
        """Delete a user matched on (id, tenant_id).

        Returns:
            Number of rows affected
        """
        ...


@runtime_checkable
class ISessionRepository(Protocol):
    """Repository for Session aggregates.

    Tenant-scoped methods take ``tenant_id`` first. ``get_by_token``,
    ``delete_by_token`` and ``delete_expired`` are credential-path methods
    reserved for the session store.
    """

    async def create(self, tenant_id: TenantId, session: Session) -> Session:
        """Insert a session row stamped with ``tenant_id``.

        Raises:
            ValueError: If the aggregate belongs to another tenant
        """
        ...

    async def count_active(self, tenant_id: TenantId, now: datetime) -> int:
        """Count sessions of a tenant that have not expired at ``now``."""
        ...

    async def delete_for_user(self, tenant_id: TenantId, user_id: UserId) -> int:
        """Delete every session of a user within one tenant.

        Returns:
            Number of sessions deleted
        """
        ...

    async def get_by_token(self, token: str) -> Session | None:
        """Look up a session by its token (credential path)."""
        ...

    async def delete_by_token(self, token: str) -> int:
        """Delete the session with the given token, if any (credential path)."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session with ``expires_at < now`` across all tenants."""
        ...


@runtime_checkable
class IOrgSettingsRepository(Protocol):
    """Tenant-scoped repository for the per-tenant settings document."""

    async def get(self, tenant_id: TenantId) -> OrgSettings | None:
        """Retrieve the settings document of a tenant."""
        ...

    async def upsert(self, tenant_id: TenantId, settings: dict[str, Any]) -> OrgSettings:
        """Create or replace the settings document of a tenant."""
        ...

    async def update(self, tenant_id: TenantId, settings: dict[str, Any]) -> int:
        """Replace an existing settings document.

        Returns:
            Number of rows affected (0 when the tenant has no settings yet)
        """
        ...

    async def delete(self, tenant_id: TenantId) -> int:
        """Delete the settings document of a tenant."""
        ...


@runtime_checkable
class IPasswordHasher(Protocol):
    """Password hashing capability."""

    def hash(self, plaintext: str) -> str:
        """Return a salted digest of ``plaintext``."""
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check ``plaintext`` against a digest produced by ``hash``."""
        ...
