"""PostgreSQL implementation of ITenantRepository.

This repository manages tenant metadata storage in PostgreSQL. Request
handling only reads tenants; ``save`` exists for out-of-band provisioning.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import Subdomain, TenantId
from iam.infrastructure.models import TenantModel
from iam.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from iam.ports.exceptions import DuplicateSubdomainError
from iam.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Persist a newly provisioned tenant.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateSubdomainError: If the subdomain is already taken
        """
        existing = await self.get_by_subdomain(tenant.subdomain)
        if existing is not None and existing.id != tenant.id:
            self._probe.duplicate_subdomain(tenant.subdomain.value)
            raise DuplicateSubdomainError(
                f"Subdomain '{tenant.subdomain}' is already in use"
            )

        self._session.add(
            TenantModel(
                id=tenant.id.value,
                subdomain=tenant.subdomain.value,
                name=tenant.name,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent provisioning of the same subdomain
            if "uq_tenants_subdomain" in str(e):
                self._probe.duplicate_subdomain(tenant.subdomain.value)
                raise DuplicateSubdomainError(
                    f"Subdomain '{tenant.subdomain}' is already in use"
                ) from e
            raise

        self._probe.tenant_saved(tenant.id.value, tenant.subdomain.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch tenant metadata from PostgreSQL.

        Args:
            tenant_id: The unique identifier of the tenant

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    async def get_by_subdomain(self, subdomain: Subdomain) -> Tenant | None:
        """Fetch a tenant by its normalized subdomain.

        Args:
            subdomain: The subdomain value object

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.subdomain == subdomain.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.tenant_not_found(subdomain.value)
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    def _to_aggregate(self, model: TenantModel) -> Tenant:
        """Convert ORM model to domain aggregate."""
        return Tenant(
            id=TenantId(value=model.id),
            subdomain=Subdomain(model.subdomain),
            name=model.name,
        )
