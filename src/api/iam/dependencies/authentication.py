"""Authentication dependencies for protected routes.

Protected routes depend on ``get_authenticated_identity``. An unresolved
tenant and a missing or invalid session both get the response chosen by
the configured unauthenticated policy (401, 404 or a redirect to the login
page), so callers cannot tell which check failed or whether a subdomain
exists.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultAuthenticationProbe
from iam.application.services import (
    AuthenticationGate,
    SessionStore,
    TenantResolver,
)
from iam.application.value_objects import AuthenticatedIdentity
from iam.dependencies.data_access import get_scoped_data_access
from iam.dependencies.observability import get_observation_context
from iam.dependencies.session import get_session_store, get_session_token
from iam.dependencies.tenant import get_resolved_tenant, get_tenant_resolver
from iam.domain.aggregates import Tenant
from iam.ports.scoped_access import TenantScopedDataAccess
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.observability_context import ObservationContext

UNAUTHORIZED_DETAIL = "Unauthorized"


def get_authentication_gate(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    data_access: Annotated[TenantScopedDataAccess, Depends(get_scoped_data_access)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AuthenticationGate:
    """Get AuthenticationGate instance."""
    return AuthenticationGate(
        session=session,
        resolver=resolver,
        session_store=session_store,
        data_access=data_access,
        probe=DefaultAuthenticationProbe().with_context(context),
    )


def unauthenticated_error(tenancy: TenancySettings) -> HTTPException:
    """Build the response for a request that failed authentication."""
    if tenancy.unauthenticated_policy == "not_found":
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not found",
        )
    if tenancy.unauthenticated_policy == "redirect":
        return HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail=UNAUTHORIZED_DETAIL,
            headers={"Location": tenancy.login_path},
        )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
    )


async def get_authenticated_identity(
    tenant: Annotated[Tenant | None, Depends(get_resolved_tenant)],
    token: Annotated[str | None, Depends(get_session_token)],
    gate: Annotated[AuthenticationGate, Depends(get_authentication_gate)],
    tenancy: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> AuthenticatedIdentity:
    """Require an authenticated identity for the request's tenant.

    Raises:
        HTTPException: per the configured unauthenticated policy, alike for
            an unresolved tenant and an invalid session
    """
    if tenant is None:
        raise unauthenticated_error(tenancy)

    identity = await gate.authenticate_for_tenant(tenant, token)
    if identity is None:
        raise unauthenticated_error(tenancy)
    return identity
