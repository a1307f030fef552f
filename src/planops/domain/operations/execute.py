"""Apply resolved operation batches to the persistent store.

Operations run in a fixed priority order, each inside its own unit of work: every
write of one operation commits together or not at all. A failing operation is
recorded in the result and the batch moves on to the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from planops.domain.model import date_for_day
from planops.domain.operations.defaults import (
    category_defaults,
    round_half_up,
    scale_distance_m,
)
from planops.domain.operations.model import (
    TARGETED_OPERATION_TYPES,
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    MoveWorkoutType,
    RemoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    describe_week_selection,
    execution_priority,
    selected_week_numbers,
)
from planops.domain.operations.references import parse_iso_date
from planops.domain.operations.settings import EngineSettings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from uuid import UUID

    from planops.domain.model import PlannedWorkout, TrainingWeek
    from planops.domain.operations.model import PlanOperation, WeekSelection, WorkoutTarget
    from planops.domain.ports import PlanRepositories, PlanUnitOfWork

log = getLogger(__name__)


class OperationFailedError(Exception):
    """Raised by a handler when one operation cannot be applied."""


@dataclass(slots=True)
class ApplyResult:
    """Outcome of applying a batch."""

    success: bool
    operations_applied: int = 0
    workouts_modified: int = 0
    errors: list[str] = field(default_factory=list[str])


def ordered_for_execution(operations: Iterable[PlanOperation]) -> list[PlanOperation]:
    """Stable sort by execution priority; batch order breaks ties."""

    return sorted(operations, key=execution_priority)


def operation_label(operation: PlanOperation) -> str:
    """Short identifier of what ``operation`` targets, used in error messages."""

    if isinstance(operation, TARGETED_OPERATION_TYPES):
        return operation.target.label()
    if isinstance(operation, SwapDays | MoveWorkoutType | RemoveWorkoutType):
        return describe_week_selection(operation.week_numbers)
    if isinstance(operation, ScaleWeekVolume):
        return f"week {operation.week_number}"
    return f"phase {operation.phase_name}"


class OperationExecutor:
    def __init__(
        self,
        unit_of_work_factory: Callable[[], PlanUnitOfWork],
        *,
        plan_id: UUID,
        settings: EngineSettings | None = None,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self.plan_id = plan_id
        self.settings = settings or EngineSettings()

    def execute(self, operations: Sequence[PlanOperation]) -> ApplyResult:
        """Apply ``operations`` (already resolved) and report per-operation outcomes."""

        result = ApplyResult(success=True)
        for operation in ordered_for_execution(operations):
            try:
                with self._unit_of_work_factory() as uow:
                    modified = self.apply_one(uow.repositories, operation)
                    uow.commit()
            except Exception as exc:  # noqa: BLE001
                message = f"{operation.OP} {operation_label(operation)}: {exc}"
                log.warning(f"Operation failed: {message}")
                result.errors.append(message)
                continue
            result.operations_applied += 1
            result.workouts_modified += modified

        result.success = not result.errors
        log.info(
            f"Applied {result.operations_applied}/{len(operations)} operations, "
            f"{result.workouts_modified} workouts modified, {len(result.errors)} errors"
        )
        return result

    def apply_one(  # noqa: PLR0911
        self, repositories: PlanRepositories, operation: PlanOperation
    ) -> int:
        """Apply a single operation and return the number of workouts written."""

        if isinstance(operation, SwapDays):
            return self._swap_days(repositories, operation)
        if isinstance(operation, MoveWorkoutType):
            return self._move_workout_type(repositories, operation)
        if isinstance(operation, RemoveWorkoutType):
            return self._remove_workout_type(repositories, operation)
        if isinstance(operation, ScaleWeekVolume):
            week = self._week(repositories, operation.week_number)
            return self._scale_weeks(repositories, (week,), operation.factor)
        if isinstance(operation, ScalePhaseVolume):
            weeks = self._phase_weeks(repositories, operation.phase_name)
            return self._scale_weeks(repositories, weeks, operation.factor)

        if not isinstance(operation, TARGETED_OPERATION_TYPES):
            raise OperationFailedError(f"Unsupported operation: {operation!r}")
        workout = self._workout(repositories, operation.target)
        if isinstance(operation, RescheduleWorkout):
            new_date = parse_iso_date(operation.new_date)
            if new_date is None:
                raise OperationFailedError(f'Invalid date format "{operation.new_date}"')
            workout.scheduled_date = new_date
            return 1
        if isinstance(operation, ChangeWorkoutType):
            self._change_type(workout, operation)
            return 1
        if isinstance(operation, ChangeWorkoutDistance):
            if operation.new_distance_m < 0:
                raise OperationFailedError("Distance cannot be negative")
            workout.distance_m = round_half_up(operation.new_distance_m)
            return 1
        if isinstance(operation, ScaleWorkoutDistance):
            if workout.distance_m is None:
                return 0
            workout.distance_m = scale_distance_m(workout.distance_m, operation.factor)
            return 1
        if isinstance(operation, ChangeIntensity):
            workout.intensity = operation.new_intensity
            return 1
        raise OperationFailedError(f"Unsupported operation: {operation!r}")

    # Lookups ------------------------------------------------------------------

    def _week(self, repositories: PlanRepositories, week_number: int) -> TrainingWeek:
        week = repositories.weeks.get_by_number(self.plan_id, week_number)
        if week is None:
            raise OperationFailedError(f"Week {week_number} not found")
        return week

    def _weeks(
        self, repositories: PlanRepositories, selection: WeekSelection
    ) -> list[TrainingWeek]:
        numbers = selected_week_numbers(selection)
        if numbers is None:
            return sorted(
                repositories.weeks.list_for_plan(self.plan_id), key=lambda week: week.week_number
            )
        return [self._week(repositories, number) for number in numbers]

    def _phase_weeks(self, repositories: PlanRepositories, phase_name: str) -> list[TrainingWeek]:
        needle = phase_name.strip().casefold()
        weeks = [
            week
            for week in repositories.weeks.list_for_plan(self.plan_id)
            if week.phase_name is not None and week.phase_name.strip().casefold() == needle
        ]
        if not weeks:
            raise OperationFailedError(f'Phase "{phase_name}" not found')
        return sorted(weeks, key=lambda week: week.week_number)

    def _workout(self, repositories: PlanRepositories, target: WorkoutTarget) -> PlannedWorkout:
        if target.workout_id is None:
            raise OperationFailedError("Workout reference could not be resolved")
        workout = repositories.workouts.get(target.workout_id)
        if workout is None:
            raise OperationFailedError("Workout not found")
        week = repositories.weeks.get(workout.week_id)
        if week is None or week.plan_id != self.plan_id:
            raise OperationFailedError("Workout does not belong to this plan")
        return workout

    # Handlers -----------------------------------------------------------------

    def _swap_days(self, repositories: PlanRepositories, operation: SwapDays) -> int:
        if operation.day_a == operation.day_b:
            return 0
        modified = 0
        for week in self._weeks(repositories, operation.week_numbers):
            first = repositories.workouts.find_in_slot(week.id, operation.day_a)
            second = repositories.workouts.find_in_slot(week.id, operation.day_b)
            if first is not None and second is not None:
                first_date, second_date = first.scheduled_date, second.scheduled_date
                first.move_to(operation.day_b, second_date)
                second.move_to(operation.day_a, first_date)
                modified += 2
            elif first is not None:
                first.move_to(operation.day_b, date_for_day(week.start_date, operation.day_b))
                modified += 1
            elif second is not None:
                second.move_to(operation.day_a, date_for_day(week.start_date, operation.day_a))
                modified += 1
        return modified

    def _move_workout_type(self, repositories: PlanRepositories, operation: MoveWorkoutType) -> int:
        modified = 0
        for week in self._weeks(repositories, operation.week_numbers):
            workouts = sorted(repositories.workouts.list_for_week(week.id), key=lambda w: w.day)
            moving = next((w for w in workouts if w.category == operation.category), None)
            if moving is None or moving.day == operation.to_day:
                continue
            displaced = repositories.workouts.find_in_slot(week.id, operation.to_day)
            origin, origin_date = moving.day, moving.scheduled_date
            if displaced is None:
                moving.move_to(operation.to_day, date_for_day(week.start_date, operation.to_day))
                modified += 1
                continue
            moving.move_to(operation.to_day, displaced.scheduled_date)
            displaced.move_to(origin, origin_date)
            modified += 2
        return modified

    def _remove_workout_type(
        self, repositories: PlanRepositories, operation: RemoveWorkoutType
    ) -> int:
        modified = 0
        for week in self._weeks(repositories, operation.week_numbers):
            for workout in repositories.workouts.list_for_week(week.id):
                if workout.category == operation.category:
                    workout.category = operation.replacement
                    modified += 1
        return modified

    def _scale_weeks(
        self, repositories: PlanRepositories, weeks: Iterable[TrainingWeek], factor: float
    ) -> int:
        modified = 0
        for week in weeks:
            for workout in repositories.workouts.list_for_week(week.id):
                if workout.is_rest or not workout.distance_m:
                    continue
                workout.distance_m = scale_distance_m(workout.distance_m, factor)
                modified += 1
            if week.volume_target_m is not None:
                week.volume_target_m = scale_distance_m(week.volume_target_m, factor)
        return modified

    def _change_type(self, workout: PlannedWorkout, operation: ChangeWorkoutType) -> None:
        workout.category = operation.new_category
        if operation.new_description:
            workout.description = operation.new_description
            return
        defaults = category_defaults(
            operation.new_category,
            current_distance_km=workout.distance_km,
            unit=self.settings.distance_unit,
        )
        workout.description = defaults.description
        if defaults.intensity is not None:
            workout.intensity = defaults.intensity
        if defaults.distance_m is not None:
            workout.distance_m = defaults.distance_m
        if defaults.clears_duration:
            workout.duration_s = None
