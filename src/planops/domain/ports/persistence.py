"""Ports for persisting schedule aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from planops.domain.model import PlannedWorkout, TrainingPlan, TrainingWeek

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class TrainingPlanRepository(Repository[TrainingPlan], Protocol):
    """Persistence contract for training plans."""


@runtime_checkable
class TrainingWeekRepository(Repository[TrainingWeek], Protocol):
    """Persistence contract for training weeks."""

    def get_by_number(self, plan_id: UUID, week_number: int) -> TrainingWeek | None: ...

    def list_for_plan(self, plan_id: UUID) -> list[TrainingWeek]: ...


@runtime_checkable
class PlannedWorkoutRepository(Repository[PlannedWorkout], Protocol):
    """Persistence contract for planned workouts.

    Updates are plain attribute writes on loaded entities; the unit of work
    persists them on commit.
    """

    def find_in_slot(self, week_id: UUID, day: int) -> PlannedWorkout | None: ...

    def list_for_week(self, week_id: UUID) -> list[PlannedWorkout]: ...
