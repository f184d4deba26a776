"""SQLAlchemy ORM model for the tenants table.

Stores tenant metadata in PostgreSQL. Tenants represent organizations
and are the top-level isolation boundary in the system.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Note: subdomains are globally unique and always stored lower-cased.
    Rows are provisioned out-of-band and only read during request handling.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    subdomain: Mapped[str] = mapped_column(String(63), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("subdomain", name="uq_tenants_subdomain"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, subdomain={self.subdomain})>"
