"""add manual_attendance_points for exempt employees

Revision ID: 0002_manual_points
Revises: 0001_initial
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0002_manual_points"
down_revision: Union[str, None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "manual_attendance_points",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("employee_key", sa.String(64), nullable=False),
        sa.Column("points", sa.Numeric(4, 2), nullable=False),
        sa.Column("note", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("points >= 0 AND points <= 10", name="ck_manual_points_range"),
    )
    op.create_index(
        "ix_manual_points_employee", "manual_attendance_points", ["employee_key"]
    )


def downgrade() -> None:
    op.drop_index("ix_manual_points_employee", table_name="manual_attendance_points")
    op.drop_table("manual_attendance_points")
