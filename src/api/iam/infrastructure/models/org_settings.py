"""SQLAlchemy ORM model for the org_settings table."""

from typing import Any

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class OrgSettingsModel(Base, TimestampMixin):
    """ORM model for org_settings table.

    One row per tenant: tenant_id is the primary key and references
    tenants.id with CASCADE delete. The settings document is JSONB.
    """

    __tablename__ = "org_settings"

    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        primary_key=True,
    )
    settings: Mapped[dict[str, Any]] = mapped_column(nullable=False, default=dict)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<OrgSettingsModel(tenant_id={self.tenant_id})>"
