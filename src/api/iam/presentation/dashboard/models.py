"""Pydantic models for dashboard and org settings responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from iam.application.value_objects import DashboardSummary
from iam.domain.aggregates import OrgSettings
from iam.presentation.models import TenantResponse, UserResponse


class StatsResponse(BaseModel):
    """Tenant-wide counters."""

    total_users: int = Field(..., description="Users registered in the tenant")
    active_sessions: int = Field(..., description="Unexpired sessions in the tenant")


class DashboardResponse(BaseModel):
    """Response model for the tenant dashboard."""

    success: bool = True
    user: UserResponse
    tenant: TenantResponse
    stats: StatsResponse
    settings: dict[str, Any] | None = None

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> DashboardResponse:
        """Convert the dashboard read model to API response."""
        return cls(
            user=UserResponse.from_domain(summary.user),
            tenant=TenantResponse.from_domain(summary.tenant),
            stats=StatsResponse(
                total_users=summary.total_users,
                active_sessions=summary.active_sessions,
            ),
            settings=summary.settings,
        )


class UpdateSettingsRequest(BaseModel):
    """Request model for replacing the tenant's settings document."""

    settings: dict[str, Any] | None = Field(
        None, description="The complete settings document"
    )


class SettingsResponse(BaseModel):
    """Response model for the tenant's settings document."""

    success: bool = True
    settings: dict[str, Any] | None = None

    @classmethod
    def from_domain(cls, org_settings: OrgSettings | None) -> SettingsResponse:
        """Convert domain OrgSettings (or its absence) to API response."""
        return cls(settings=org_settings.settings if org_settings else None)
