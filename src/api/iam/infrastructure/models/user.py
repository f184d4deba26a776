"""SQLAlchemy ORM model for the users table.

Stores user accounts in PostgreSQL. Every row is owned by one tenant and
email addresses are unique per tenant only.
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    Notes:
    - tenant_id is VARCHAR(26) for ULID format
    - (email, tenant_id) is unique; the same email may exist in other tenants
    - password_hash holds the bcrypt digest, never the plaintext

    Foreign Key Constraint:
    - tenant_id references tenants.id with CASCADE delete
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", "tenant_id", name="uq_users_email_tenant"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, tenant_id={self.tenant_id}, email={self.email})>"
