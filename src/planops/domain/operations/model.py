"""Operation vocabulary for structured plan edits.

Every operation is a small frozen value describing one discrete change. Operations
carry no behaviour: validation, preview and execution dispatch on the concrete
type, and interactions between operations of one batch are handled by the preview
merge step and the executor's priority ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, Final, Literal

if TYPE_CHECKING:
    from uuid import UUID


class OperationKind(StrEnum):
    SWAP_DAYS = "swap_days"
    MOVE_WORKOUT_TYPE = "move_workout_type"
    RESCHEDULE_WORKOUT = "reschedule_workout"
    CHANGE_WORKOUT_TYPE = "change_workout_type"
    CHANGE_WORKOUT_DISTANCE = "change_workout_distance"
    SCALE_WORKOUT_DISTANCE = "scale_workout_distance"
    CHANGE_INTENSITY = "change_intensity"
    REMOVE_WORKOUT_TYPE = "remove_workout_type"
    SCALE_WEEK_VOLUME = "scale_week_volume"
    SCALE_PHASE_VOLUME = "scale_phase_volume"


ALL_WEEKS: Final = "all"

type WeekSelection = tuple[int, ...] | Literal["all"]


def selected_week_numbers(selection: WeekSelection) -> tuple[int, ...] | None:
    """Return explicit week numbers, or ``None`` when every week is selected."""

    if selection == ALL_WEEKS:
        return None
    return tuple(selection)


def describe_week_selection(selection: WeekSelection) -> str:
    numbers = selected_week_numbers(selection)
    if numbers is None:
        return "all weeks"
    return "weeks " + ", ".join(str(number) for number in numbers)


@dataclass(frozen=True, slots=True, kw_only=True)
class WorkoutTarget:
    """Reference to a single workout: a ``W<week>:D<day>`` slot and/or a stable id."""

    slot: str | None = None
    workout_id: UUID | None = None

    def label(self) -> str:
        if self.slot:
            return self.slot
        if self.workout_id is not None:
            return f"#{self.workout_id}"
        return "<unspecified>"

    def resolved(self, workout_id: UUID) -> WorkoutTarget:
        return replace(self, workout_id=workout_id)


# Schedule operations --------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class SwapDays:
    OP: ClassVar[OperationKind] = OperationKind.SWAP_DAYS

    week_numbers: WeekSelection
    day_a: int
    day_b: int


@dataclass(frozen=True, slots=True, kw_only=True)
class MoveWorkoutType:
    OP: ClassVar[OperationKind] = OperationKind.MOVE_WORKOUT_TYPE

    category: str
    to_day: int
    week_numbers: WeekSelection


@dataclass(frozen=True, slots=True, kw_only=True)
class RescheduleWorkout:
    OP: ClassVar[OperationKind] = OperationKind.RESCHEDULE_WORKOUT

    target: WorkoutTarget
    new_date: str


# Workout modifications ------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeWorkoutType:
    OP: ClassVar[OperationKind] = OperationKind.CHANGE_WORKOUT_TYPE

    target: WorkoutTarget
    new_category: str
    new_description: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeWorkoutDistance:
    OP: ClassVar[OperationKind] = OperationKind.CHANGE_WORKOUT_DISTANCE

    target: WorkoutTarget
    new_distance_m: float


@dataclass(frozen=True, slots=True, kw_only=True)
class ScaleWorkoutDistance:
    OP: ClassVar[OperationKind] = OperationKind.SCALE_WORKOUT_DISTANCE

    target: WorkoutTarget
    factor: float


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeIntensity:
    OP: ClassVar[OperationKind] = OperationKind.CHANGE_INTENSITY

    target: WorkoutTarget
    new_intensity: str


# Bulk operations ------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveWorkoutType:
    OP: ClassVar[OperationKind] = OperationKind.REMOVE_WORKOUT_TYPE

    category: str
    replacement: str
    week_numbers: WeekSelection


@dataclass(frozen=True, slots=True, kw_only=True)
class ScaleWeekVolume:
    OP: ClassVar[OperationKind] = OperationKind.SCALE_WEEK_VOLUME

    week_number: int
    factor: float


@dataclass(frozen=True, slots=True, kw_only=True)
class ScalePhaseVolume:
    OP: ClassVar[OperationKind] = OperationKind.SCALE_PHASE_VOLUME

    phase_name: str
    factor: float


type TargetedOperation = (
    RescheduleWorkout
    | ChangeWorkoutType
    | ChangeWorkoutDistance
    | ScaleWorkoutDistance
    | ChangeIntensity
)

type PlanOperation = (
    SwapDays
    | MoveWorkoutType
    | RescheduleWorkout
    | ChangeWorkoutType
    | ChangeWorkoutDistance
    | ScaleWorkoutDistance
    | ChangeIntensity
    | RemoveWorkoutType
    | ScaleWeekVolume
    | ScalePhaseVolume
)

TARGETED_OPERATION_TYPES: Final = (
    RescheduleWorkout,
    ChangeWorkoutType,
    ChangeWorkoutDistance,
    ScaleWorkoutDistance,
    ChangeIntensity,
)

# Distance must be final before a type change derives descriptions from it.
EXECUTION_PRIORITY: Final[dict[OperationKind, int]] = {
    OperationKind.CHANGE_WORKOUT_DISTANCE: 1,
    OperationKind.SCALE_WORKOUT_DISTANCE: 1,
    OperationKind.CHANGE_INTENSITY: 2,
    OperationKind.CHANGE_WORKOUT_TYPE: 3,
    OperationKind.RESCHEDULE_WORKOUT: 4,
    OperationKind.SWAP_DAYS: 5,
    OperationKind.MOVE_WORKOUT_TYPE: 5,
    OperationKind.REMOVE_WORKOUT_TYPE: 6,
    OperationKind.SCALE_WEEK_VOLUME: 7,
    OperationKind.SCALE_PHASE_VOLUME: 8,
}


def execution_priority(operation: PlanOperation) -> int:
    return EXECUTION_PRIORITY[operation.OP]


@dataclass(frozen=True, slots=True)
class FallbackRequest:
    """Producer signalled that the change cannot be expressed as operations."""

    reason: str
