"""Human-readable operation descriptions."""

from __future__ import annotations

from typing import Final

from planops.domain.operations.model import (
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    MoveWorkoutType,
    PlanOperation,
    RemoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    describe_week_selection,
)

DAY_NAMES: Final = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def day_name(day: int, week_starts_on: int = 0) -> str:
    """Name of plan day ``day`` (1 = first day of the week) given the week start (0 = Sunday)."""

    return DAY_NAMES[(week_starts_on + day - 1) % 7]


def _percent(factor: float) -> str:
    return f"{factor * 100:.0f}%"


def describe_operation(operation: PlanOperation, week_starts_on: int = 0) -> str:  # noqa: PLR0911
    if isinstance(operation, SwapDays):
        return (
            f"Swap {day_name(operation.day_a, week_starts_on)} and "
            f"{day_name(operation.day_b, week_starts_on)} in "
            f"{describe_week_selection(operation.week_numbers)}"
        )
    if isinstance(operation, MoveWorkoutType):
        return (
            f"Move {operation.category} workouts to "
            f"{day_name(operation.to_day, week_starts_on)} in "
            f"{describe_week_selection(operation.week_numbers)}"
        )
    if isinstance(operation, RescheduleWorkout):
        return f"Move workout {operation.target.label()} to {operation.new_date}"
    if isinstance(operation, ChangeWorkoutType):
        return f"Change workout {operation.target.label()} to {operation.new_category}"
    if isinstance(operation, ChangeWorkoutDistance):
        return (
            f"Change workout {operation.target.label()} distance to "
            f"{operation.new_distance_m / 1000:.1f}km"
        )
    if isinstance(operation, ScaleWorkoutDistance):
        return (
            f"Scale workout {operation.target.label()} distance by {_percent(operation.factor)}"
        )
    if isinstance(operation, ChangeIntensity):
        return f"Change workout {operation.target.label()} intensity to {operation.new_intensity}"
    if isinstance(operation, RemoveWorkoutType):
        return (
            f"Replace {operation.category} with {operation.replacement} in "
            f"{describe_week_selection(operation.week_numbers)}"
        )
    if isinstance(operation, ScaleWeekVolume):
        return f"Scale week {operation.week_number} volume by {_percent(operation.factor)}"
    if isinstance(operation, ScalePhaseVolume):
        return f"Scale {operation.phase_name} phase volume by {_percent(operation.factor)}"
    raise TypeError(f"Unsupported operation: {operation!r}")
