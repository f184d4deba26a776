"""create tenants table

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-09-28

Creates the tenants table. Each tenant is reached through a globally
unique, lower-case subdomain.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create tenants table with unique subdomain."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(26), primary_key=True),
        sa.Column("subdomain", sa.String(63), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("subdomain", name="uq_tenants_subdomain"),
    )


def downgrade() -> None:
    """Drop tenants table."""
    op.drop_table("tenants")
