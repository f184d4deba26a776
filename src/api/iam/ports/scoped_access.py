"""Tenant-scoped data access facade over the repository ports.

Every tenant-owned read or write goes through the user, session and org
settings repositories, whose methods all take ``tenant_id`` first. This
module adds two helpers on top of them:

- ``with_tenant`` merges caller filters with the mandatory tenant id
- ``TenantScopedDataAccess.for_tenant`` returns a view bound to one tenant,
  so call sites that perform several operations do not re-thread the id

The bound view exposes only tenant-scoped methods. The session store's
credential-path methods (lookup by token, expiry sweep) are not reachable
through it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from iam.domain.aggregates import OrgSettings, Session, User
from iam.domain.value_objects import TenantId, UserId
from iam.ports.repositories import (
    IOrgSettingsRepository,
    ISessionRepository,
    IUserRepository,
)

TENANT_ID_FIELD = "tenant_id"


def with_tenant(
    tenant_id: TenantId, filters: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Merge caller filters with the mandatory tenant predicate.

    The tenant id always wins: a ``tenant_id`` key supplied by the caller
    is overwritten.

    Args:
        tenant_id: The resolved tenant
        filters: Optional equality filters keyed by column name

    Returns:
        A new filter mapping that always contains ``tenant_id``
    """
    scoped = dict(filters or {})
    scoped[TENANT_ID_FIELD] = tenant_id.value
    return scoped


class ScopedUsers:
    """User operations bound to one tenant."""

    def __init__(self, repository: IUserRepository, tenant_id: TenantId) -> None:
        self._repository = repository
        self._tenant_id = tenant_id

    async def create(self, user: User) -> User:
        return await self._repository.create(self._tenant_id, user)

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self._repository.get_by_id(self._tenant_id, user_id)

    async def get_by_email(self, email: str) -> User | None:
        return await self._repository.get_by_email(self._tenant_id, email)

    async def find(self, **filters: Any) -> list[User]:
        return await self._repository.find(self._tenant_id, **filters)

    async def count(self) -> int:
        return await self._repository.count(self._tenant_id)

    async def update(
        self,
        user_id: UserId,
        *,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> int:
        return await self._repository.update(
            self._tenant_id, user_id, name=name, password_hash=password_hash
        )

    async def delete(self, user_id: UserId) -> int:
        return await self._repository.delete(self._tenant_id, user_id)


class ScopedSessions:
    """Session operations bound to one tenant."""

    def __init__(self, repository: ISessionRepository, tenant_id: TenantId) -> None:
        self._repository = repository
        self._tenant_id = tenant_id

    async def create(self, session: Session) -> Session:
        return await self._repository.create(self._tenant_id, session)

    async def count_active(self, now: datetime) -> int:
        return await self._repository.count_active(self._tenant_id, now)

    async def delete_for_user(self, user_id: UserId) -> int:
        return await self._repository.delete_for_user(self._tenant_id, user_id)


class ScopedOrgSettings:
    """Org settings operations bound to one tenant."""

    def __init__(
        self, repository: IOrgSettingsRepository, tenant_id: TenantId
    ) -> None:
        self._repository = repository
        self._tenant_id = tenant_id

    async def get(self) -> OrgSettings | None:
        return await self._repository.get(self._tenant_id)

    async def upsert(self, settings: dict[str, Any]) -> OrgSettings:
        return await self._repository.upsert(self._tenant_id, settings)

    async def update(self, settings: dict[str, Any]) -> int:
        return await self._repository.update(self._tenant_id, settings)

    async def delete(self) -> int:
        return await self._repository.delete(self._tenant_id)


@dataclass(frozen=True)
class TenantScope:
    """Tenant-bound view over the three tenant-owned entity accessors."""

    tenant_id: TenantId
    users: ScopedUsers
    sessions: ScopedSessions
    org_settings: ScopedOrgSettings


class TenantScopedDataAccess:
    """Facade over the tenant-scoped repositories.

    The repositories are exposed as-is for callers that thread the tenant id
    themselves; ``for_tenant`` returns a bound view for everyone else.
    """

    def __init__(
        self,
        users: IUserRepository,
        sessions: ISessionRepository,
        org_settings: IOrgSettingsRepository,
    ) -> None:
        self.users = users
        self.sessions = sessions
        self.org_settings = org_settings

    def for_tenant(self, tenant_id: TenantId) -> TenantScope:
        """Bind every entity accessor to ``tenant_id``."""
        return TenantScope(
            tenant_id=tenant_id,
            users=ScopedUsers(self.users, tenant_id),
            sessions=ScopedSessions(self.sessions, tenant_id),
            org_settings=ScopedOrgSettings(self.org_settings, tenant_id),
        )
