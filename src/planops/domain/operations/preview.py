"""Dry-run simulation of operation batches against a schedule snapshot.

Each operation is simulated independently against the unmodified snapshot. The
per-operation results are then merged per ``(week, day)`` slot so that a workout
touched by several operations shows one combined before/after pair, reported
under the operation that touched it first.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from planops.domain.model import WorkoutCategory, date_for_day
from planops.domain.operations.defaults import (
    category_defaults,
    km_to_m,
    round_half_up,
    scale_distance_m,
)
from planops.domain.operations.describe import describe_operation
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
    selected_week_numbers,
)
from planops.domain.operations.references import parse_iso_date, parse_slot_ref
from planops.domain.operations.settings import EngineSettings

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from planops.domain.model import ScheduleSnapshot, SnapshotWeek, SnapshotWorkout
    from planops.domain.operations.model import PlanOperation, TargetedOperation

EMPTY_SLOT_DESCRIPTION = "Empty"


@dataclass(frozen=True, slots=True, kw_only=True)
class WorkoutState:
    scheduled_date: date
    category: str
    description: str
    distance_km: float | None
    intensity: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AffectedWorkout:
    week_number: int
    day: int
    before: WorkoutState
    after: WorkoutState

    @property
    def key(self) -> tuple[int, int]:
        return self.week_number, self.day


@dataclass(slots=True, kw_only=True)
class OperationPreview:
    operation: PlanOperation
    description: str
    affected: list[AffectedWorkout] = field(default_factory=list[AffectedWorkout])


def preview_operations(
    operations: Sequence[PlanOperation],
    snapshot: ScheduleSnapshot,
    *,
    settings: EngineSettings | None = None,
) -> list[OperationPreview]:
    """Simulate ``operations`` and return merged per-operation previews.

    Operations whose slots were all claimed by an earlier operation, or that touch
    nothing, are left out of the result.
    """

    settings = settings or EngineSettings()
    raw = [
        (operation, simulate_operation(operation, snapshot, settings=settings))
        for operation in operations
    ]
    return merge_previews(raw, week_starts_on=snapshot.week_starts_on)


def simulate_operation(  # noqa: PLR0911
    operation: PlanOperation,
    snapshot: ScheduleSnapshot,
    *,
    settings: EngineSettings,
) -> list[AffectedWorkout]:
    """Return the slots ``operation`` would change, ignoring the rest of the batch."""

    if isinstance(operation, SwapDays):
        return _simulate_swap(operation, snapshot)
    if isinstance(operation, MoveWorkoutType):
        return _simulate_move(operation, snapshot)
    if isinstance(operation, RemoveWorkoutType):
        weeks = snapshot.select_weeks(selected_week_numbers(operation.week_numbers))
        return [
            _affected(week, workout, replace(_state(workout), category=operation.replacement))
            for week in weeks
            for workout in week.workouts
            if workout.category == operation.category
        ]
    if isinstance(operation, ScaleWeekVolume):
        week = snapshot.week(operation.week_number)
        if week is None:
            return []
        return _scale_weeks((week,), operation.factor)
    if isinstance(operation, ScalePhaseVolume):
        return _scale_weeks(snapshot.phase_weeks(operation.phase_name), operation.factor)
    if isinstance(operation, TARGETED_OPERATION_TYPES):
        return _simulate_targeted(operation, snapshot, settings)
    return []


def merge_previews(
    raw: Sequence[tuple[PlanOperation, list[AffectedWorkout]]],
    *,
    week_starts_on: int = 0,
) -> list[OperationPreview]:
    """Combine independent simulations so each slot is reported once."""

    merged: dict[tuple[int, int], AffectedWorkout] = {}
    owner: dict[tuple[int, int], int] = {}

    for index, (_, records) in enumerate(raw):
        for record in records:
            existing = merged.get(record.key)
            if existing is None:
                merged[record.key] = record
                owner[record.key] = index
            else:
                merged[record.key] = replace(
                    existing, after=_merge_after(existing.before, existing.after, record.after)
                )

    previews: list[OperationPreview] = []
    for index, (operation, records) in enumerate(raw):
        affected: list[AffectedWorkout] = []
        seen: set[tuple[int, int]] = set()
        for record in records:
            if owner[record.key] != index or record.key in seen:
                continue
            seen.add(record.key)
            affected.append(merged[record.key])
        if affected:
            previews.append(
                OperationPreview(
                    operation=operation,
                    description=describe_operation(operation, week_starts_on),
                    affected=affected,
                )
            )
    return previews


def _merge_after(before: WorkoutState, current: WorkoutState, update: WorkoutState) -> WorkoutState:
    before = _baseline(before)
    changes: dict[str, object] = {}
    if update.scheduled_date != before.scheduled_date:
        changes["scheduled_date"] = update.scheduled_date
    if update.category != before.category:
        changes["category"] = update.category
    if update.description != before.description:
        changes["description"] = update.description
    if update.distance_km is not None and update.distance_km != before.distance_km:
        changes["distance_km"] = update.distance_km
    if update.intensity is not None and update.intensity != before.intensity:
        changes["intensity"] = update.intensity
    return replace(current, **changes) if changes else current


def _placeholder_state(scheduled_date: date) -> WorkoutState:
    return WorkoutState(
        scheduled_date=scheduled_date,
        category=WorkoutCategory.REST,
        description="Rest day",
        distance_km=0.0,
    )


def _baseline(before: WorkoutState) -> WorkoutState:
    # Edits of an empty slot start from the materialised rest day, not from "Empty".
    if before.description == EMPTY_SLOT_DESCRIPTION and before.distance_km is None:
        return _placeholder_state(before.scheduled_date)
    return before


def _state(workout: SnapshotWorkout) -> WorkoutState:
    return WorkoutState(
        scheduled_date=workout.scheduled_date,
        category=workout.category,
        description=workout.description,
        distance_km=workout.distance_km,
        intensity=workout.intensity,
    )


def _affected(week: SnapshotWeek, workout: SnapshotWorkout, after: WorkoutState) -> AffectedWorkout:
    return AffectedWorkout(
        week_number=week.week_number, day=workout.day, before=_state(workout), after=after
    )


def _moved(week: SnapshotWeek, workout: SnapshotWorkout, scheduled_date: date) -> AffectedWorkout:
    return _affected(week, workout, replace(_state(workout), scheduled_date=scheduled_date))


def _simulate_swap(operation: SwapDays, snapshot: ScheduleSnapshot) -> list[AffectedWorkout]:
    if operation.day_a == operation.day_b:
        return []
    records: list[AffectedWorkout] = []
    weeks = snapshot.select_weeks(selected_week_numbers(operation.week_numbers))
    for week in weeks:
        first = week.workout_on(operation.day_a)
        second = week.workout_on(operation.day_b)
        if first is not None and second is not None:
            records.append(_moved(week, first, second.scheduled_date))
            records.append(_moved(week, second, first.scheduled_date))
        elif first is not None:
            records.append(_moved(week, first, date_for_day(week.start_date, operation.day_b)))
        elif second is not None:
            records.append(_moved(week, second, date_for_day(week.start_date, operation.day_a)))
    return records


def _simulate_move(operation: MoveWorkoutType, snapshot: ScheduleSnapshot) -> list[AffectedWorkout]:
    records: list[AffectedWorkout] = []
    for week in snapshot.select_weeks(selected_week_numbers(operation.week_numbers)):
        workout = week.first_of_category(operation.category)
        if workout is None or workout.day == operation.to_day:
            continue
        displaced = week.workout_on(operation.to_day)
        if displaced is None:
            records.append(
                _moved(week, workout, date_for_day(week.start_date, operation.to_day))
            )
            continue
        records.append(_moved(week, workout, displaced.scheduled_date))
        records.append(_moved(week, displaced, workout.scheduled_date))
    return records


def _scale_weeks(weeks: Iterable[SnapshotWeek], factor: float) -> list[AffectedWorkout]:
    records: list[AffectedWorkout] = []
    for week in weeks:
        for workout in week.workouts:
            if workout.category == WorkoutCategory.REST or not workout.distance_km:
                continue
            scaled = scale_distance_m(km_to_m(workout.distance_km), factor) / 1000
            records.append(_affected(week, workout, replace(_state(workout), distance_km=scaled)))
    return records


def _locate_target(
    operation: TargetedOperation, snapshot: ScheduleSnapshot
) -> tuple[SnapshotWeek, int, SnapshotWorkout | None] | None:
    target = operation.target
    if target.slot is not None:
        slot = parse_slot_ref(target.slot)
        if slot is None:
            return None
        week = snapshot.week(slot.week_number)
        if week is None:
            return None
        return week, slot.day, week.workout_on(slot.day)
    if target.workout_id is not None:
        located = snapshot.locate(target.workout_id)
        if located is None:
            return None
        week, workout = located
        return week, workout.day, workout
    return None


def _simulate_targeted(
    operation: TargetedOperation,
    snapshot: ScheduleSnapshot,
    settings: EngineSettings,
) -> list[AffectedWorkout]:
    located = _locate_target(operation, snapshot)
    if located is None:
        return []
    week, day, workout = located

    if workout is not None:
        before = _state(workout)
        base = before
    else:
        # An empty slot is materialised as a rest day before the edit applies.
        scheduled = date_for_day(week.start_date, day)
        before = WorkoutState(
            scheduled_date=scheduled,
            category=WorkoutCategory.REST,
            description=EMPTY_SLOT_DESCRIPTION,
            distance_km=None,
        )
        base = _placeholder_state(scheduled)

    after = apply_to_state(operation, base, settings=settings)
    if after is None:
        return []
    return [AffectedWorkout(week_number=week.week_number, day=day, before=before, after=after)]


def apply_to_state(
    operation: TargetedOperation,
    state: WorkoutState,
    *,
    settings: EngineSettings,
) -> WorkoutState | None:
    """Return ``state`` with a single-workout edit applied, or ``None`` if it cannot apply.

    ``state`` comes from the snapshot, not from earlier operations in the batch, so a
    race description built here uses the snapshot distance even when the same batch
    also changes that distance. Execution sees the updated distance instead.
    """

    if isinstance(operation, RescheduleWorkout):
        new_date = parse_iso_date(operation.new_date)
        if new_date is None:
            return None
        return replace(state, scheduled_date=new_date)
    if isinstance(operation, ChangeWorkoutType):
        if operation.new_description:
            return replace(
                state, category=operation.new_category, description=operation.new_description
            )
        defaults = category_defaults(
            operation.new_category,
            current_distance_km=state.distance_km,
            unit=settings.distance_unit,
        )
        updated = replace(
            state, category=operation.new_category, description=defaults.description
        )
        if defaults.intensity is not None:
            updated = replace(updated, intensity=defaults.intensity)
        if defaults.distance_m is not None:
            updated = replace(updated, distance_km=defaults.distance_m / 1000)
        return updated
    if isinstance(operation, ChangeWorkoutDistance):
        return replace(state, distance_km=round_half_up(operation.new_distance_m) / 1000)
    if isinstance(operation, ScaleWorkoutDistance):
        if state.distance_km is None:
            return None
        return replace(
            state,
            distance_km=scale_distance_m(km_to_m(state.distance_km), operation.factor) / 1000,
        )
    if isinstance(operation, ChangeIntensity):
        return replace(state, intensity=operation.new_intensity)
    return None
