"""Workforce scheduling tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

Adds position, role, geofence, shift_pattern, pay_rule, internal_note,
invitation and absence. All of them cascade from organization.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _organization_id() -> sa.Column:
    return sa.Column(
        "organization_id",
        sa.Integer(),
        sa.ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=False,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def _flag(name: str) -> sa.Column:
    return sa.Column(name, sa.Boolean(), server_default=sa.false(), nullable=False)


def _count(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), server_default="0", nullable=False)


def upgrade() -> None:
    """Create the scheduling tables."""
    op.create_table(
        "position",
        _id(),
        _organization_id(),
        sa.Column("position_name", sa.Text(), nullable=False),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _created_at(),
    )
    op.create_index("idx_position_org", "position", ["organization_id"])

    op.create_table(
        "role",
        _id(),
        _organization_id(),
        sa.Column("role_type", sa.Text(), nullable=False),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _created_at(),
        sa.UniqueConstraint("organization_id", "role_type", name="uq_role_org_type"),
    )
    op.create_index("idx_role_org", "role", ["organization_id"])

    op.create_table(
        "geofence",
        _id(),
        _organization_id(),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("radius", sa.Float(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("idx_geofence_org", "geofence", ["organization_id"])

    op.create_table(
        "shift_pattern",
        _id(),
        _organization_id(),
        sa.Column(
            "location_id",
            sa.Integer(),
            sa.ForeignKey("location.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("pattern_name", sa.Text(), nullable=False),
        sa.Column("pattern_type", sa.Text(), nullable=True),
        _flag("is_weekly"),
        _count("repeat_week_num"),
        _flag("is_on_and_off"),
        _count("length_days"),
        _flag("is_specific_month"),
        _count("days"),
        _count("repeat_month"),
        _flag("is_last_day_of_month"),
        sa.Column("period_starting_date", sa.Date(), nullable=True),
        sa.Column("period_ending_date", sa.Date(), nullable=True),
        _flag("is_applied_on_bank_holidays"),
        _flag("is_auto_extend"),
        _count("auto_extend_month"),
        _count("auto_extend_days_before_period"),
        sa.Column("period_starting_time", sa.Time(), nullable=True),
        sa.Column("period_ending_time", sa.Time(), nullable=True),
        sa.Column("shift_instruction", sa.Text(), server_default="", nullable=False),
        _created_at(),
    )
    op.create_index("idx_shift_pattern_org", "shift_pattern", ["organization_id"])

    op.create_table(
        "pay_rule",
        _id(),
        _organization_id(),
        sa.Column("pay_rate", sa.Float(), nullable=False),
        sa.Column("pay_code", sa.Text(), nullable=False),
        sa.Column("conditions", sa.Text(), nullable=True),
        sa.Column("applies_to", sa.JSON(), nullable=False),
        _created_at(),
    )
    op.create_index("idx_pay_rule_org", "pay_rule", ["organization_id"])

    op.create_table(
        "internal_note",
        _id(),
        _organization_id(),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "owner_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("description", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("idx_internal_note_org", "internal_note", ["organization_id"])

    op.create_table(
        "invitation",
        _id(),
        _organization_id(),
        sa.Column("email", sa.Text(), nullable=False),
        _flag("is_sent"),
        _flag("is_accepted"),
        _flag("is_rejected"),
        _created_at(),
    )
    op.create_index("idx_invitation_org", "invitation", ["organization_id"])

    op.create_table(
        "absence",
        _id(),
        _organization_id(),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profile.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("absence_type", sa.Text(), nullable=False),
        sa.Column("starting_date", sa.Date(), nullable=False),
        sa.Column("ending_date", sa.Date(), nullable=False),
        sa.Column("days_of_holidays", sa.Integer(), nullable=True),
        _flag("is_paid"),
        sa.Column("comment", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("idx_absence_org", "absence", ["organization_id"])


def downgrade() -> None:
    """Drop the scheduling tables."""
    for table in (
        "absence",
        "invitation",
        "internal_note",
        "pay_rule",
        "shift_pattern",
        "geofence",
        "role",
        "position",
    ):
        op.drop_index(f"idx_{table}_org", table_name=table)
        op.drop_table(table)
