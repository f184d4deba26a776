"""Pydantic models shared by the IAM presentation packages."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Tenant, User


class UserResponse(BaseModel):
    """Public view of a user. The password digest is never included."""

    id: str = Field(..., description="User ID (ULID format)")
    email: str = Field(..., description="Normalized email address")
    name: str | None = Field(None, description="Display name")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response."""
        return cls(id=user.id.value, email=user.email, name=user.name)


class TenantResponse(BaseModel):
    """Public view of a tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    subdomain: str = Field(..., description="Tenant subdomain")
    name: str = Field(..., description="Organization name")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            subdomain=tenant.subdomain.value,
            name=tenant.name,
        )
