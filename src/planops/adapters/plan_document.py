"""Pydantic models for JSON plan documents imported through the CLI."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from planops.domain.model import DAYS_PER_WEEK


class PlanDocumentModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class WorkoutDocument(PlanDocumentModel):
    day: int = Field(ge=1, le=DAYS_PER_WEEK)
    category: str
    description: str = ""
    distance_m: int | None = Field(default=None, alias="distanceMeters", ge=0)
    duration_s: int | None = Field(default=None, alias="durationSeconds", ge=0)
    intensity: str | None = None


class WeekDocument(PlanDocumentModel):
    week_number: int = Field(alias="weekNumber", ge=1)
    start_date: date | None = Field(default=None, alias="startDate")
    phase_name: str | None = Field(default=None, alias="phaseName")
    volume_target_m: int | None = Field(default=None, alias="volumeTargetMeters", ge=0)
    workouts: list[WorkoutDocument] = Field(default_factory=list[WorkoutDocument])

    @model_validator(mode="after")
    def _one_workout_per_day(self) -> Self:
        days = [workout.day for workout in self.workouts]
        if len(days) != len(set(days)):
            raise ValueError(f"Week {self.week_number} has more than one workout on a day")
        return self


class PlanDocument(PlanDocumentModel):
    name: str
    start_date: date = Field(alias="startDate")
    week_starts_on: int = Field(default=0, alias="weekStartsOn", ge=0, le=6)
    weeks: list[WeekDocument]

    @model_validator(mode="after")
    def _unique_week_numbers(self) -> Self:
        numbers = [week.week_number for week in self.weeks]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Week numbers must be unique")
        return self

    def week_start(self, week: WeekDocument) -> date:
        """Explicit week start, or the plan start shifted by whole weeks."""

        return week.start_date or self.start_date + timedelta(weeks=week.week_number - 1)
