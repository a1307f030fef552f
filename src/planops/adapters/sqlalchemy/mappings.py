"""SQLAlchemy mapping metadata for the planops schedule model."""

from __future__ import annotations

import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from planops.domain.model import (
    PlannedWorkout,
    PlanStatus,
    TrainingPlan,
    TrainingWeek,
    WorkoutStatus,
)

if TYPE_CHECKING:
    from enum import StrEnum

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

training_plan_table = Table(
    "training_plan",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("start_date", Date, nullable=False),
    Column("week_starts_on", Integer, nullable=False, default=0),
    Column(
        "status",
        Enum(PlanStatus, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
    ),
)

training_week_table = Table(
    "training_week",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "plan_id",
        UUIDColumnType,
        ForeignKey("training_plan.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("week_number", Integer, nullable=False),
    Column("start_date", Date, nullable=False),
    Column("phase_name", String, nullable=True),
    Column("volume_target_m", Integer, nullable=True),
    UniqueConstraint("plan_id", "week_number"),
)

# Two workouts may briefly share a day while a swap is being flushed, so the slot
# index is not unique; the executor keeps slots exclusive.
planned_workout_table = Table(
    "planned_workout",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "week_id",
        UUIDColumnType,
        ForeignKey("training_week.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("day", Integer, nullable=False),
    Column("scheduled_date", Date, nullable=False),
    Column("category", String(32), nullable=False),
    Column("description", String, nullable=False, default=""),
    Column("distance_m", Integer, nullable=True),
    Column("duration_s", Integer, nullable=True),
    Column("intensity", String(16), nullable=True),
    Column(
        "status",
        Enum(WorkoutStatus, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
    ),
    Index("ix_planned_workout_week_id_day", "week_id", "day"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the schedule model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(TrainingPlan, training_plan_table)
    mapper_registry.map_imperatively(TrainingWeek, training_week_table)
    mapper_registry.map_imperatively(PlannedWorkout, planned_workout_table)

    configure_mappers()
    return mapper_registry
