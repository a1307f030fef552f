"""Read-only schedule snapshot used for validation and preview.

A snapshot is a point-in-time view supplied by the caller. The engine never
mutates it; execution always reads the live store instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class SnapshotWorkout:
    day: int
    category: str
    description: str
    distance_km: float | None
    scheduled_date: date
    intensity: str | None = None
    workout_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SnapshotWeek:
    week_number: int
    start_date: date
    phase_name: str | None = None
    workouts: tuple[SnapshotWorkout, ...] = ()

    def workout_on(self, day: int) -> SnapshotWorkout | None:
        for workout in self.workouts:
            if workout.day == day:
                return workout
        return None

    def first_of_category(self, category: str) -> SnapshotWorkout | None:
        for workout in sorted(self.workouts, key=lambda item: item.day):
            if workout.category == category:
                return workout
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class ScheduleSnapshot:
    plan_id: UUID | None = None
    week_starts_on: int = 0
    weeks: tuple[SnapshotWeek, ...] = ()

    def week(self, week_number: int) -> SnapshotWeek | None:
        for week in self.weeks:
            if week.week_number == week_number:
                return week
        return None

    def has_week(self, week_number: int) -> bool:
        return self.week(week_number) is not None

    def locate(self, workout_id: UUID) -> tuple[SnapshotWeek, SnapshotWorkout] | None:
        for week in self.weeks:
            for workout in week.workouts:
                if workout.workout_id == workout_id:
                    return week, workout
        return None

    def select_weeks(self, week_numbers: Iterable[int] | None) -> tuple[SnapshotWeek, ...]:
        """Return the weeks named in ``week_numbers`` (all weeks when ``None``)."""

        if week_numbers is None:
            return self.weeks
        wanted = set(week_numbers)
        return tuple(week for week in self.weeks if week.week_number in wanted)

    def phase_weeks(self, phase_name: str) -> tuple[SnapshotWeek, ...]:
        needle = phase_name.strip().casefold()
        return tuple(
            week
            for week in self.weeks
            if week.phase_name is not None and week.phase_name.strip().casefold() == needle
        )
