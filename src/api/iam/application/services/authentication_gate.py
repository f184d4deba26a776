"""Authentication gate application service.

Composes tenant resolution, session validation and the user lookup into
one decision. There is no partial success: the gate returns an identity
only when every check passes.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services.session_store import SessionStore
from iam.application.services.tenant_resolver import TenantResolver
from iam.application.value_objects import AuthenticatedIdentity
from iam.domain.aggregates import Tenant
from iam.ports.scoped_access import TenantScopedDataAccess


class AuthenticationGate:
    """Authenticates requests against the tenant they were addressed to.

    Checks, in order:
    1. The request resolves to a tenant
    2. The token is a live session issued for that tenant
    3. The session's user exists in that tenant and agrees with the
       session's tenant stamp
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: TenantResolver,
        session_store: SessionStore,
        data_access: TenantScopedDataAccess,
        probe: AuthenticationProbe | None = None,
    ) -> None:
        self._session = session
        self._resolver = resolver
        self._session_store = session_store
        self._data_access = data_access
        self._probe = probe or DefaultAuthenticationProbe()

    async def authenticate(
        self, host: str | None, token: str | None
    ) -> AuthenticatedIdentity | None:
        """Authenticate a request from its Host header and session token.

        Returns:
            The authenticated user and tenant, or None
        """
        tenant = await self._resolver.resolve(host)
        if tenant is None:
            self._probe.authentication_rejected("tenant_unresolved")
            return None
        return await self.authenticate_for_tenant(tenant, token)

    async def authenticate_for_tenant(
        self, tenant: Tenant, token: str | None
    ) -> AuthenticatedIdentity | None:
        """Authenticate a session token against an already resolved tenant.

        Returns:
            The authenticated user and tenant, or None
        """
        if not token:
            self._probe.authentication_rejected("missing_token", tenant.id.value)
            return None

        identity = await self._session_store.validate(
            token, expected_tenant_id=tenant.id
        )
        if identity is None:
            self._probe.authentication_rejected("invalid_session", tenant.id.value)
            return None

        scope = self._data_access.for_tenant(identity.tenant_id)
        async with self._session.begin():
            user = await scope.users.get_by_id(identity.user_id)

        if user is None:
            self._probe.authentication_rejected("user_not_found", tenant.id.value)
            return None

        if user.tenant_id != identity.tenant_id:
            self._probe.session_user_tenant_mismatch(
                user.id.value, identity.tenant_id.value, user.tenant_id.value
            )
            return None

        self._probe.authentication_succeeded(user.id.value, tenant.id.value)
        return AuthenticatedIdentity(user=user, tenant=tenant)
