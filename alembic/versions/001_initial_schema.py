"""Initial schema: users and noise_levels.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ZERO_INTERVAL = sa.text("interval '0'")


def upgrade() -> None:
    """Create users and noise_levels."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("streak", sa.Integer(), server_default="0", nullable=False),
        sa.Column("all_time_streak", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("max_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("month_max_score", sa.String(32), server_default="noScore", nullable=False),
        sa.Column("time_measured", sa.Interval(), server_default=_ZERO_INTERVAL, nullable=False),
        sa.Column("max_time", sa.Interval(), server_default=_ZERO_INTERVAL, nullable=False),
        sa.Column("month_max_time", sa.String(32), server_default="noRecord", nullable=False),
        sa.Column("all_time_measured", sa.Interval(), server_default=_ZERO_INTERVAL, nullable=False),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "noise_levels",
        sa.Column("latitude", sa.Double(), nullable=False),
        sa.Column("longitude", sa.Double(), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("laeq", sa.Double(), nullable=False),
        sa.Column("la50", sa.Double(), nullable=False),
        sa.Column("measurements_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("latitude", "longitude", "time", name="pk_noise_levels"),
    )


def downgrade() -> None:
    """Drop noise_levels and users."""
    op.drop_table("noise_levels")
    op.drop_table("users")
