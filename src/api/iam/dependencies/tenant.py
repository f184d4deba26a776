"""Tenant resolution dependencies.

Resolves the tenant of a request according to the deployment mode:

- single: the resolver parses the Host header in-process
- split: the edge middleware already parsed the host and forwarded the
  candidate in ``x-tenant-subdomain``; the resolver only upgrades it

Resolution never raises. An unresolved tenant is ``None`` and each entry
point decides what that means for its response.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultTenantDirectoryProbe,
    DefaultTenantResolverProbe,
)
from iam.application.services import TenantDirectory, TenantResolver
from iam.dependencies.observability import get_observation_context
from iam.domain.aggregates import Tenant
from iam.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_directory_session
from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.tenant_context import (
    TENANT_SUBDOMAIN_HEADER,
    TenantCandidate,
)
from shared_kernel.observability_context import ObservationContext


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_directory_session)],
) -> TenantRepository:
    """Get TenantRepository instance on the directory session."""
    return TenantRepository(session=session)


def get_tenant_directory(
    session: Annotated[AsyncSession, Depends(get_directory_session)],
    repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantDirectory:
    """Get TenantDirectory instance.

    Uses the dedicated directory session so lookups never share a
    transaction with the request's business operations.
    """
    return TenantDirectory(
        session=session,
        tenant_repository=repository,
        probe=DefaultTenantDirectoryProbe().with_context(context),
    )


def get_tenant_resolver(
    directory: Annotated[TenantDirectory, Depends(get_tenant_directory)],
    tenancy: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantResolver:
    """Get TenantResolver instance configured with the loopback aliases."""
    return TenantResolver(
        directory=directory,
        loopback_hosts=tenancy.loopback_hosts,
        probe=DefaultTenantResolverProbe().with_context(context),
    )


async def get_resolved_tenant(
    request: Request,
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    tenancy: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> Tenant | None:
    """Resolve the tenant the request was addressed to.

    On success the shared-kernel TenantContext is stored on
    ``request.state.tenant`` for other bounded contexts.

    Returns:
        The verified Tenant, or None if the request carries no known tenant
    """
    if tenancy.deployment_mode == "split":
        forwarded = request.headers.get(TENANT_SUBDOMAIN_HEADER)
        candidate = TenantCandidate(subdomain=forwarded) if forwarded else None
        tenant = await resolver.resolve_candidate(candidate)
    else:
        tenant = await resolver.resolve(request.headers.get("host"))

    if tenant is not None:
        request.state.tenant = TenantResolver.to_context(tenant)
    return tenant
