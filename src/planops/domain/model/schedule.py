"""Persisted schedule entities: plans, weeks and planned workouts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from planops.domain.model.base import Entity
from planops.domain.model.enums import PlanStatus, WorkoutCategory, WorkoutStatus

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

DAYS_PER_WEEK = 7


def date_for_day(week_start: date, day: int) -> date:
    """Return the calendar date of ``day`` (1-7) in the week starting at ``week_start``."""

    return week_start + timedelta(days=day - 1)


@dataclass(eq=False, kw_only=True)
class TrainingPlan(Entity):
    name: str
    start_date: date
    week_starts_on: int = 0
    status: PlanStatus = PlanStatus.ACTIVE


@dataclass(eq=False, kw_only=True)
class TrainingWeek(Entity):
    plan_id: UUID
    week_number: int
    start_date: date
    phase_name: str | None = None
    volume_target_m: int | None = None


@dataclass(eq=False, kw_only=True)
class PlannedWorkout(Entity):
    """A concrete workout occupying one day slot of a training week.

    ``day`` is the symbolic position (1-7 relative to the week start); together with
    the week number it forms the ``W<week>:D<day>`` label. Identity never changes when
    the workout moves between days.
    """

    week_id: UUID
    day: int
    scheduled_date: date
    category: str
    description: str = ""
    distance_m: int | None = None
    duration_s: int | None = None
    intensity: str | None = None
    status: WorkoutStatus = WorkoutStatus.SCHEDULED

    @property
    def distance_km(self) -> float | None:
        if self.distance_m is None:
            return None
        return self.distance_m / 1000

    @property
    def is_rest(self) -> bool:
        return self.category == WorkoutCategory.REST

    def move_to(self, day: int, scheduled_date: date) -> None:
        self.day = day
        self.scheduled_date = scheduled_date


def make_placeholder(*, week: TrainingWeek, day: int, scheduled_date: date) -> PlannedWorkout:
    """Default rest workout materialised for an empty slot."""

    return PlannedWorkout(
        week_id=week.id,
        day=day,
        scheduled_date=scheduled_date,
        category=WorkoutCategory.REST,
        description="Rest day",
        distance_m=0,
        status=WorkoutStatus.SCHEDULED,
    )
