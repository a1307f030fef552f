"""Stateless validation of operation batches against a schedule snapshot.

Validation only inspects operation values and the snapshot; it never reads the
store, so callers may run it on every edit of a request.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from planops.domain.model import Intensity
from planops.domain.operations.model import (
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
from planops.domain.operations.references import is_valid_day, parse_iso_date, parse_slot_ref
from planops.domain.operations.settings import EngineSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from planops.domain.model import ScheduleSnapshot
    from planops.domain.operations.model import PlanOperation, WeekSelection, WorkoutTarget

KNOWN_INTENSITIES: Final = frozenset(intensity.value for intensity in Intensity)


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class _Checker:
    snapshot: ScheduleSnapshot
    settings: EngineSettings
    result: ValidationResult

    def error(self, operation: PlanOperation, message: str) -> None:
        self.result.errors.append(f"{operation.OP}: {message}")

    def warn(self, operation: PlanOperation, message: str) -> None:
        self.result.warnings.append(f"{operation.OP}: {message}")

    def day(self, operation: PlanOperation, day: int, *, label: str = "day") -> None:
        if not is_valid_day(day):
            self.error(operation, f"Invalid {label} {day}")

    def weeks(self, operation: PlanOperation, selection: WeekSelection) -> None:
        numbers = selected_week_numbers(selection)
        if numbers is None:
            return
        if not numbers:
            self.error(operation, "No weeks selected")
        for number in numbers:
            self.week(operation, number)

    def week(self, operation: PlanOperation, week_number: int) -> None:
        if not self.snapshot.has_week(week_number):
            self.error(operation, f"Week {week_number} not found")

    def category(self, operation: PlanOperation, category: str, *, label: str) -> None:
        if not category.strip():
            self.error(operation, f"{label.capitalize()} must not be empty")
        elif category not in self.settings.known_categories:
            self.warn(operation, f'Unknown {label} "{category}"')

    def target(self, operation: PlanOperation, target: WorkoutTarget) -> None:
        if target.slot is None:
            if target.workout_id is None:
                self.error(operation, "No workout id or workout slot provided")
            return
        slot = parse_slot_ref(target.slot)
        if slot is None:
            self.error(operation, f'Invalid workout reference "{target.slot}"')
            return
        if not is_valid_day(slot.day):
            self.error(operation, f"Invalid day {slot.day} in {target.slot}")
        if target.workout_id is None:
            self.week(operation, slot.week_number)

    def factor(self, operation: PlanOperation, factor: float) -> None:
        if not math.isfinite(factor):
            self.error(operation, "factor must be a finite number")
            return
        if factor <= 0:
            self.error(operation, "factor must be positive")
            return
        if factor > self.settings.max_factor_warning:
            self.warn(
                operation,
                f"Scaling by more than {self.settings.max_factor_warning:g}x may be excessive",
            )
        if factor < self.settings.min_factor_warning:
            self.warn(
                operation,
                f"Scaling to less than {self.settings.min_factor_warning * 100:.0f}% "
                "may be excessive",
            )


def validate_operations(  # noqa: C901, PLR0912
    operations: Sequence[PlanOperation],
    snapshot: ScheduleSnapshot,
    *,
    settings: EngineSettings | None = None,
) -> ValidationResult:
    """Check ``operations`` against schedule shape and semantic bounds."""

    check = _Checker(
        snapshot=snapshot,
        settings=settings or EngineSettings(),
        result=ValidationResult(),
    )

    for operation in operations:
        if isinstance(operation, SwapDays):
            check.day(operation, operation.day_a)
            check.day(operation, operation.day_b)
            check.weeks(operation, operation.week_numbers)
        elif isinstance(operation, MoveWorkoutType):
            check.day(operation, operation.to_day, label="target day")
            check.category(operation, operation.category, label="workout type")
            check.weeks(operation, operation.week_numbers)
        elif isinstance(operation, RescheduleWorkout):
            check.target(operation, operation.target)
            if parse_iso_date(operation.new_date) is None:
                check.error(operation, f'Invalid date format "{operation.new_date}"')
        elif isinstance(operation, ChangeWorkoutType):
            check.target(operation, operation.target)
            check.category(operation, operation.new_category, label="workout type")
        elif isinstance(operation, ChangeWorkoutDistance):
            check.target(operation, operation.target)
            _check_distance(check, operation)
        elif isinstance(operation, ScaleWorkoutDistance):
            check.target(operation, operation.target)
            check.factor(operation, operation.factor)
        elif isinstance(operation, ChangeIntensity):
            check.target(operation, operation.target)
            if operation.new_intensity not in KNOWN_INTENSITIES:
                check.warn(operation, f'Unknown intensity "{operation.new_intensity}"')
        elif isinstance(operation, RemoveWorkoutType):
            check.category(operation, operation.replacement, label="replacement type")
            check.weeks(operation, operation.week_numbers)
        elif isinstance(operation, ScaleWeekVolume):
            check.week(operation, operation.week_number)
            check.factor(operation, operation.factor)
        elif isinstance(operation, ScalePhaseVolume):
            if not snapshot.phase_weeks(operation.phase_name):
                check.error(operation, f'Phase "{operation.phase_name}" not found')
            check.factor(operation, operation.factor)
        else:
            check.result.errors.append(f"Unsupported operation: {operation!r}")

    return check.result


def _check_distance(check: _Checker, operation: ChangeWorkoutDistance) -> None:
    distance = operation.new_distance_m
    if not math.isfinite(distance):
        check.error(operation, "Distance must be a finite number")
    elif distance < 0:
        check.error(operation, "Distance cannot be negative")
    elif distance > check.settings.max_distance_warning_km * 1000:
        check.warn(
            operation,
            f"Distance over {check.settings.max_distance_warning_km:g}km seems high",
        )
