"""SQLAlchemy ORM model for the sessions table.

Sessions are written once and never updated, so the table carries only
created_at instead of the full timestamp mixin.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, _utc_now


class SessionModel(Base):
    """ORM model for sessions table.

    Notes:
    - token is unique and is the lookup key for validation
    - tenant_id is denormalized from the owning user at creation
    - expires_at is indexed for the expiry sweep

    Foreign Key Constraints:
    - user_id references users.id with CASCADE delete
    - tenant_id references tenants.id with CASCADE delete
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SessionModel(id={self.id}, user_id={self.user_id}, "
            f"tenant_id={self.tenant_id}, expires_at={self.expires_at})>"
        )
