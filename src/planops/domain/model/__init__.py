"""Domain model for training schedules."""

from __future__ import annotations

from .base import Entity, new_id
from .enums import DistanceUnit, Intensity, PlanStatus, WorkoutCategory, WorkoutStatus
from .schedule import (
    DAYS_PER_WEEK,
    PlannedWorkout,
    TrainingPlan,
    TrainingWeek,
    date_for_day,
    make_placeholder,
)
from .snapshot import ScheduleSnapshot, SnapshotWeek, SnapshotWorkout

__all__ = [
    "DAYS_PER_WEEK",
    "DistanceUnit",
    "Entity",
    "Intensity",
    "PlanStatus",
    "PlannedWorkout",
    "ScheduleSnapshot",
    "SnapshotWeek",
    "SnapshotWorkout",
    "TrainingPlan",
    "TrainingWeek",
    "WorkoutCategory",
    "WorkoutStatus",
    "date_for_day",
    "make_placeholder",
    "new_id",
]
