"""create staff, duty roster, daily assignment and rest record tables

Revision ID: 3c1f9e2a7b40
Revises:
Create Date: 2026-10-19 09:12:44.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9e2a7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

staff_category = sa.Enum("officer", "career_military", "contract_labor", "other", name="staff_category")
rest_category = sa.Enum(
    "on_duty_rest", "business_trip", "reinforcement", "training", "other", name="rest_category"
)


def upgrade() -> None:
    op.create_table(
        "staff_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("category", staff_category, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_staff_members_full_name", "staff_members", ["full_name"])

    op.create_table(
        "duty_rosters",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("duty_date", sa.Date(), nullable=False),
        sa.Column("doctor", sa.Text(), nullable=True),
        sa.Column("resident", sa.Text(), nullable=True),
        sa.Column("postgraduate", sa.Text(), nullable=True),
        sa.Column("nurse", sa.Text(), nullable=True),
        sa.Column("assistant_nurse", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.UniqueConstraint("duty_date", name="uq_duty_roster_date"),
    )
    op.create_index("ix_duty_rosters_duty_date", "duty_rosters", ["duty_date"])

    op.create_table(
        "daily_assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("assignment_date", sa.Date(), nullable=False),
        sa.Column("room_1", sa.Text(), nullable=True),
        sa.Column("room_2", sa.Text(), nullable=True),
        sa.Column("room_3", sa.Text(), nullable=True),
        sa.Column("room_4", sa.Text(), nullable=True),
        sa.Column("outside_run", sa.Text(), nullable=True),
        sa.Column("imaging", sa.Text(), nullable=True),
        sa.Column("data_entry", sa.Text(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.UniqueConstraint("assignment_date", name="uq_daily_assignment_date"),
    )
    op.create_index("ix_daily_assignments_assignment_date", "daily_assignments", ["assignment_date"])

    op.create_table(
        "rest_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "staff_id",
            sa.Integer(),
            sa.ForeignKey("staff_members.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("category", rest_category, nullable=False),
        sa.Column("rest_date", sa.Date(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_rest_records_staff_id", "rest_records", ["staff_id"])
    op.create_index("ix_rest_records_rest_date", "rest_records", ["rest_date"])


def downgrade() -> None:
    op.drop_index("ix_rest_records_rest_date", table_name="rest_records")
    op.drop_index("ix_rest_records_staff_id", table_name="rest_records")
    op.drop_table("rest_records")
    op.drop_index("ix_daily_assignments_assignment_date", table_name="daily_assignments")
    op.drop_table("daily_assignments")
    op.drop_index("ix_duty_rosters_duty_date", table_name="duty_rosters")
    op.drop_table("duty_rosters")
    op.drop_index("ix_staff_members_full_name", table_name="staff_members")
    op.drop_table("staff_members")
    rest_category.drop(op.get_bind(), checkfirst=True)
    staff_category.drop(op.get_bind(), checkfirst=True)
