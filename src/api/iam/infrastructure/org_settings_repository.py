"""PostgreSQL implementation of IOrgSettingsRepository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import OrgSettings
from iam.domain.value_objects import TenantId
from iam.infrastructure.models import OrgSettingsModel
from iam.infrastructure.observability import (
    DefaultOrgSettingsRepositoryProbe,
    OrgSettingsRepositoryProbe,
)
from iam.ports.repositories import IOrgSettingsRepository


class OrgSettingsRepository(IOrgSettingsRepository):
    """PostgreSQL-backed repository for the per-tenant settings document.

    The tenant id is the primary key, so every statement is keyed on it.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: OrgSettingsRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrgSettingsRepositoryProbe()

    async def get(self, tenant_id: TenantId) -> OrgSettings | None:
        """Retrieve the settings document of a tenant."""
        stmt = select(OrgSettingsModel).where(
            OrgSettingsModel.tenant_id == tenant_id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return OrgSettings(tenant_id=tenant_id, settings=dict(model.settings))

    async def upsert(self, tenant_id: TenantId, settings: dict[str, Any]) -> OrgSettings:
        """Create or replace the settings document of a tenant.

        A single INSERT .. ON CONFLICT statement, so two first-time writers
        for the same tenant never collide on the primary key.
        """
        insert_stmt = insert(OrgSettingsModel).values(
            tenant_id=tenant_id.value, settings=dict(settings)
        )
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=[OrgSettingsModel.tenant_id],
            set_={
                "settings": insert_stmt.excluded.settings,
                "updated_at": func.now(),
            },
        )
        await self._session.execute(stmt)

        self._probe.settings_saved(tenant_id.value)
        return OrgSettings(tenant_id=tenant_id, settings=dict(settings))

    async def update(self, tenant_id: TenantId, settings: dict[str, Any]) -> int:
        """Replace an existing settings document.

        Returns:
            Number of rows affected
        """
        stmt = (
            update(OrgSettingsModel)
            .where(OrgSettingsModel.tenant_id == tenant_id.value)
            .values(settings=dict(settings))
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            self._probe.settings_saved(tenant_id.value)
        return result.rowcount

    async def delete(self, tenant_id: TenantId) -> int:
        """Delete the settings document of a tenant."""
        stmt = delete(OrgSettingsModel).where(
            OrgSettingsModel.tenant_id == tenant_id.value
        )
        result = await self._session.execute(stmt)
        self._probe.settings_deleted(tenant_id.value, result.rowcount)
        return result.rowcount
