"""Initial schedule schema: plans, weeks and planned workouts.

Revision ID: 0001_initial_schedule
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schedule"
down_revision = None
branch_labels = None
depends_on = None

PLAN_STATUS = sa.Enum(
    "draft", "active", "completed", name="planstatus", native_enum=False, length=16
)
WORKOUT_STATUS = sa.Enum(
    "scheduled", "completed", "skipped", name="workoutstatus", native_enum=False, length=16
)


def upgrade() -> None:
    op.create_table(
        "training_plan",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("week_starts_on", sa.Integer(), nullable=False),
        sa.Column("status", PLAN_STATUS, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_training_plan"),
    )
    op.create_table(
        "training_week",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("phase_name", sa.String(), nullable=True),
        sa.Column("volume_target_m", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["plan_id"],
            ["training_plan.id"],
            name="fk_training_week_training_week_plan_id_training_plan",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_training_week"),
        sa.UniqueConstraint(
            "plan_id", "week_number", name="uq_training_week_training_week_plan_id"
        ),
    )
    op.create_table(
        "planned_workout",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("week_id", sa.Uuid(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("distance_m", sa.Integer(), nullable=True),
        sa.Column("duration_s", sa.Integer(), nullable=True),
        sa.Column("intensity", sa.String(length=16), nullable=True),
        sa.Column("status", WORKOUT_STATUS, nullable=False),
        sa.ForeignKeyConstraint(
            ["week_id"],
            ["training_week.id"],
            name="fk_planned_workout_planned_workout_week_id_training_week",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_planned_workout"),
    )
    op.create_index(
        "ix_planned_workout_week_id_day", "planned_workout", ["week_id", "day"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_planned_workout_week_id_day", table_name="planned_workout")
    op.drop_table("planned_workout")
    op.drop_table("training_week")
    op.drop_table("training_plan")
