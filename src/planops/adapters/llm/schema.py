"""Pydantic models describing language-model tool calls for plan operations.

Field names follow the camelCase tool schema the model is prompted with. Range
hints (days, factors, slot pattern) are published in the JSON schema but not
enforced here: the operations validator reports them with better messages.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from planops.domain.model import Intensity, WorkoutCategory

CATEGORY_NAMES = [category.value for category in WorkoutCategory]
INTENSITY_NAMES = [intensity.value for intensity in Intensity]
SLOT_HINT: dict[str, Any] = {"pattern": r"^W\d+:D\d+$"}
DAY_HINT: dict[str, Any] = {"minimum": 1, "maximum": 7}
FACTOR_HINT: dict[str, Any] = {"exclusiveMinimum": 0, "maximum": 3}

WeekNumbersField = Annotated[
    list[int] | Literal["all"],
    Field(
        alias="weekNumbers",
        description='Week numbers to apply the change to, or "all" for every week',
    ),
]
FactorField = Annotated[
    float,
    Field(
        description="Scaling factor (e.g. 0.8 for 80%, 1.2 for 120%)",
        json_schema_extra=FACTOR_HINT,
    ),
]


class ToolModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class TargetedToolModel(ToolModel):
    workout_index: str | None = Field(
        default=None,
        alias="workoutIndex",
        description='Workout slot like "W14:D6" (week 14, day 6)',
        json_schema_extra=SLOT_HINT,
    )
    workout_id: UUID | None = Field(default=None, alias="workoutId")


class SwapDaysCall(ToolModel):
    """Swap workouts between two days across specified weeks."""

    op: Literal["swap_days"] = "swap_days"
    week_numbers: WeekNumbersField
    day_a: int = Field(
        alias="dayA",
        description="First day number (1-7 relative to week start)",
        json_schema_extra=DAY_HINT,
    )
    day_b: int = Field(
        alias="dayB",
        description="Second day number (1-7 relative to week start)",
        json_schema_extra=DAY_HINT,
    )


class MoveWorkoutTypeCall(ToolModel):
    """Move the workout of a specific type to a target day across specified weeks."""

    op: Literal["move_workout_type"] = "move_workout_type"
    workout_type: str = Field(
        alias="workoutType",
        description='The workout type to move (e.g. "long_run", "rest", "tempo")',
    )
    to_day: int = Field(
        alias="toDay",
        description="Target day number (1-7 relative to week start)",
        json_schema_extra=DAY_HINT,
    )
    week_numbers: WeekNumbersField


class RescheduleWorkoutCall(TargetedToolModel):
    """Move a specific workout to a new date."""

    op: Literal["reschedule_workout"] = "reschedule_workout"
    new_date: str = Field(
        alias="newDate",
        description="New date in YYYY-MM-DD format",
        json_schema_extra={"pattern": r"^\d{4}-\d{2}-\d{2}$"},
    )


class ChangeWorkoutTypeCall(TargetedToolModel):
    """Change a specific workout's type (e.g. to rest, race, tempo)."""

    op: Literal["change_workout_type"] = "change_workout_type"
    new_type: str = Field(
        alias="newType",
        description="New workout type",
        json_schema_extra={"enum": CATEGORY_NAMES},
    )
    new_description: str | None = Field(
        default=None,
        alias="newDescription",
        description="Optional new description for the workout",
    )


class ChangeWorkoutDistanceCall(TargetedToolModel):
    """Change a specific workout's target distance."""

    op: Literal["change_workout_distance"] = "change_workout_distance"
    new_distance_meters: float = Field(
        alias="newDistanceMeters",
        description="New distance in meters",
        json_schema_extra={"minimum": 0},
    )


class ScaleWorkoutDistanceCall(TargetedToolModel):
    """Scale a specific workout's distance by a factor."""

    op: Literal["scale_workout_distance"] = "scale_workout_distance"
    factor: FactorField


class ChangeIntensityCall(TargetedToolModel):
    """Change a specific workout's intensity level."""

    op: Literal["change_intensity"] = "change_intensity"
    new_intensity: str = Field(
        alias="newIntensity",
        description="New intensity level",
        json_schema_extra={"enum": INTENSITY_NAMES},
    )


class RemoveWorkoutTypeCall(ToolModel):
    """Replace all workouts of one type with another type across specified weeks."""

    op: Literal["remove_workout_type"] = "remove_workout_type"
    workout_type: str = Field(alias="workoutType", description="The workout type to remove")
    replacement: str = Field(
        description="The workout type to replace it with",
        json_schema_extra={"enum": CATEGORY_NAMES},
    )
    week_numbers: WeekNumbersField


class ScaleWeekVolumeCall(ToolModel):
    """Scale all workout distances in a specific week by a factor."""

    op: Literal["scale_week_volume"] = "scale_week_volume"
    week_number: int = Field(
        alias="weekNumber",
        description="Week number to scale",
        json_schema_extra={"minimum": 1},
    )
    factor: FactorField


class ScalePhaseVolumeCall(ToolModel):
    """Scale all workout distances in a specific phase by a factor."""

    op: Literal["scale_phase_volume"] = "scale_phase_volume"
    phase_name: str = Field(
        alias="phaseName",
        description='Phase name (e.g. "Base", "Build", "Peak", "Taper")',
    )
    factor: FactorField


class RequestFallbackCall(ToolModel):
    """Request full plan regeneration when the change is too complex for operations."""

    op: Literal["request_fallback"] = "request_fallback"
    reason: str = Field(description="Explanation of why fallback is needed")


OperationCall = Annotated[
    SwapDaysCall
    | MoveWorkoutTypeCall
    | RescheduleWorkoutCall
    | ChangeWorkoutTypeCall
    | ChangeWorkoutDistanceCall
    | ScaleWorkoutDistanceCall
    | ChangeIntensityCall
    | RemoveWorkoutTypeCall
    | ScaleWeekVolumeCall
    | ScalePhaseVolumeCall
    | RequestFallbackCall,
    Field(discriminator="op"),
]

TOOL_MODELS: tuple[type[ToolModel], ...] = (
    SwapDaysCall,
    MoveWorkoutTypeCall,
    RescheduleWorkoutCall,
    ChangeWorkoutTypeCall,
    ChangeWorkoutDistanceCall,
    ScaleWorkoutDistanceCall,
    ChangeIntensityCall,
    RemoveWorkoutTypeCall,
    ScaleWeekVolumeCall,
    ScalePhaseVolumeCall,
    RequestFallbackCall,
)

OPERATION_CALLS_ADAPTER: TypeAdapter[list[OperationCall]] = TypeAdapter(list[OperationCall])
