"""Tenant resolver application service.

Derives the tenant of a request. In the single deployment the resolver
parses the Host header itself; in the split deployment it upgrades the
candidate forwarded by the edge middleware. Either way the directory has
the final word.
"""

from __future__ import annotations

from collections.abc import Iterable

from iam.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from iam.application.services.tenant_directory import TenantDirectory
from iam.domain.aggregates import Tenant
from shared_kernel.middleware.tenant_context import (
    DEFAULT_LOOPBACK_HOSTS,
    TenantCandidate,
    TenantContext,
    extract_subdomain,
)


class TenantResolver:
    """Resolves a request's tenant from its host or forwarded candidate."""

    def __init__(
        self,
        directory: TenantDirectory,
        loopback_hosts: Iterable[str] = DEFAULT_LOOPBACK_HOSTS,
        probe: TenantResolverProbe | None = None,
    ) -> None:
        self._directory = directory
        self._loopback_hosts = frozenset(loopback_hosts)
        self._probe = probe or DefaultTenantResolverProbe()

    async def resolve(self, host: str | None) -> Tenant | None:
        """Resolve the tenant for a Host header value.

        Returns:
            The Tenant, or None when the host carries no known tenant
        """
        subdomain = extract_subdomain(host, self._loopback_hosts)
        if subdomain is None:
            self._probe.host_without_tenant(host)
            return None
        return await self.resolve_candidate(TenantCandidate(subdomain=subdomain))

    async def resolve_candidate(self, candidate: TenantCandidate | None) -> Tenant | None:
        """Upgrade an edge-forwarded candidate to a verified tenant.

        Returns:
            The Tenant, or None when there is no candidate or it is unknown
        """
        if candidate is None:
            self._probe.forwarded_candidate_missing()
            return None

        tenant = await self._directory.resolve_by_subdomain(candidate.subdomain)
        if tenant is None:
            self._probe.candidate_unresolved(candidate.subdomain)
        return tenant

    @staticmethod
    def to_context(tenant: Tenant) -> TenantContext:
        """Describe a verified tenant for other bounded contexts."""
        return TenantContext(
            tenant_id=tenant.id.value,
            subdomain=tenant.subdomain.value,
            name=tenant.name,
        )
