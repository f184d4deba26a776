"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
the authentication context of a request and read-only view objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from iam.domain.aggregates import Tenant, User
from iam.domain.value_objects import TenantId, UserId


@dataclass(frozen=True)
class SessionIdentity:
    """The (user, tenant) pair a valid session token resolves to."""

    user_id: UserId
    tenant_id: TenantId


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Represents a request that passed every authentication check.

    The tenant was resolved from the request, the session was issued for
    that tenant and the user row still belongs to it.

    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.
    """

    user: User
    tenant: Tenant


@dataclass(frozen=True)
class IssuedSession:
    """A user together with the raw token of the session just issued.

    The token is the only session value that leaves the server.
    """

    user: User
    token: str = field(repr=False)


@dataclass(frozen=True)
class DashboardSummary:
    """Read-only view of one tenant's dashboard."""

    user: User
    tenant: Tenant
    total_users: int
    active_sessions: int
    settings: dict[str, Any] | None = None
