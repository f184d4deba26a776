"""Tenant directory application service.

Resolves subdomains to tenant records. This is the only component that
turns a subdomain string into a tenant identity.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from iam.domain.aggregates import Tenant
from iam.domain.value_objects import Subdomain
from iam.ports.repositories import ITenantRepository


class TenantDirectory:
    """Looks up tenants by subdomain.

    Storage errors and "no such tenant" produce the same ``None`` result so
    callers cannot distinguish an outage from an unknown subdomain; the
    difference is recorded through the probe only.

    Uses its own session, separate from the request's business session,
    so a lookup never interferes with the caller's transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        tenant_repository: ITenantRepository,
        probe: TenantDirectoryProbe | None = None,
    ) -> None:
        self._session = session
        self._tenant_repository = tenant_repository
        self._probe = probe or DefaultTenantDirectoryProbe()

    async def resolve_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Resolve a subdomain to its tenant.

        Args:
            subdomain: Raw subdomain; trimmed and lower-cased before lookup

        Returns:
            The Tenant, or None if not found or the lookup failed
        """
        try:
            candidate = Subdomain(subdomain)
        except ValueError:
            self._probe.invalid_subdomain(subdomain)
            return None

        try:
            async with self._session.begin():
                tenant = await self._tenant_repository.get_by_subdomain(candidate)
        except (SQLAlchemyError, OSError) as e:
            self._probe.lookup_failed(candidate.value, e)
            return None

        if tenant is None:
            self._probe.tenant_not_found(candidate.value)
            return None

        self._probe.tenant_resolved(tenant.id.value, tenant.subdomain.value)
        return tenant
