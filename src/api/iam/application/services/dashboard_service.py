"""Dashboard application service for IAM bounded context.

Read models and settings updates for an authenticated tenant member. All
data comes from the tenant the identity was authenticated against.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from iam.application.services.session_store import Clock, utc_now
from iam.application.value_objects import AuthenticatedIdentity, DashboardSummary
from iam.domain.aggregates import OrgSettings
from iam.ports.exceptions import EntityNotFoundError, ValidationFailedError
from iam.ports.scoped_access import TenantScopedDataAccess


class DashboardService:
    """Application service for tenant dashboard queries and org settings."""

    def __init__(
        self,
        session: AsyncSession,
        data_access: TenantScopedDataAccess,
        clock: Clock = utc_now,
        probe: DashboardServiceProbe | None = None,
    ) -> None:
        self._session = session
        self._data_access = data_access
        self._clock = clock
        self._probe = probe or DefaultDashboardServiceProbe()

    async def summary(self, identity: AuthenticatedIdentity) -> DashboardSummary:
        """Build the dashboard for the identity's tenant.

        Returns:
            User and active-session counts plus the settings document
        """
        scope = self._data_access.for_tenant(identity.tenant.id)
        try:
            async with self._session.begin():
                total_users = await scope.users.count()
                active_sessions = await scope.sessions.count_active(self._clock())
                org_settings = await scope.org_settings.get()
        except Exception as e:
            self._probe.operation_failed("summary", e)
            raise

        self._probe.dashboard_viewed(identity.user.id.value, identity.tenant.id.value)
        return DashboardSummary(
            user=identity.user,
            tenant=identity.tenant,
            total_users=total_users,
            active_sessions=active_sessions,
            settings=org_settings.settings if org_settings else None,
        )

    async def get_settings(self, identity: AuthenticatedIdentity) -> OrgSettings | None:
        """Read the settings document of the identity's tenant."""
        scope = self._data_access.for_tenant(identity.tenant.id)
        try:
            async with self._session.begin():
                return await scope.org_settings.get()
        except Exception as e:
            self._probe.operation_failed("get_settings", e)
            raise

    async def update_settings(
        self, identity: AuthenticatedIdentity, settings: Any
    ) -> OrgSettings:
        """Create or replace the settings document of the identity's tenant.

        Raises:
            ValidationFailedError: If the document is not a JSON object
        """
        if not isinstance(settings, dict):
            raise ValidationFailedError("Settings must be a JSON object")

        scope = self._data_access.for_tenant(identity.tenant.id)
        try:
            async with self._session.begin():
                saved = await scope.org_settings.upsert(settings)
        except Exception as e:
            self._probe.operation_failed("update_settings", e)
            raise

        self._probe.settings_updated(identity.user.id.value, identity.tenant.id.value)
        return saved

    async def delete_settings(self, identity: AuthenticatedIdentity) -> None:
        """Remove the settings document of the identity's tenant.

        Raises:
            EntityNotFoundError: If the tenant has no settings document
        """
        scope = self._data_access.for_tenant(identity.tenant.id)
        try:
            async with self._session.begin():
                deleted = await scope.org_settings.delete()
        except Exception as e:
            self._probe.operation_failed("delete_settings", e)
            raise

        if deleted == 0:
            raise EntityNotFoundError("Settings not found")
        self._probe.settings_deleted(identity.user.id.value, identity.tenant.id.value)
