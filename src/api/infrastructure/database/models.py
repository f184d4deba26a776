"""Declarative base and column mixins shared by every table.

Models for tenants, users, sessions and org settings all derive from
``Base`` so Alembic sees a single metadata object.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    """Timezone-aware now(), evaluated per INSERT or UPDATE."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for the tenantgate schema."""

    # JSON documents are stored as JSONB on PostgreSQL
    type_annotation_map: dict[type, Any] = {
        dict[str, Any]: JSON().with_variant(JSONB(), "postgresql"),
    }


class TimestampMixin:
    """Adds created_at and updated_at columns stamped in UTC.

    ``updated_at`` is refreshed by every UPDATE, including the filtered
    bulk statements the repositories issue.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        onupdate=_utc_now,
        nullable=False,
    )
