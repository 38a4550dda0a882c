"""Create subscribers and analytics tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "subscribers",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("site", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", "site", name="uq_subscribers_email_site"),
    )
    op.create_index("ix_subscribers_site", "subscribers", ["site"], unique=False)

    op.create_table(
        "analytics",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("site", sa.String(length=100), nullable=False),
        sa.Column("path", sa.String(length=500), nullable=False),
        sa.Column("event", sa.String(length=100), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_analytics_site_event", "analytics", ["site", "event"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_analytics_site_event", table_name="analytics")
    op.drop_table("analytics")
    op.drop_index("ix_subscribers_site", table_name="subscribers")
    op.drop_table("subscribers")
