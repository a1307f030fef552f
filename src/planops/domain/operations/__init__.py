"""Structured plan edit operations: model, validation, preview and execution."""

from __future__ import annotations

from .describe import describe_operation
from .engine import PlanOperationsEngine
from .execute import ApplyResult, OperationExecutor, OperationFailedError
from .model import (
    ALL_WEEKS,
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    FallbackRequest,
    MoveWorkoutType,
    OperationKind,
    PlanOperation,
    RemoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    WeekSelection,
    WorkoutTarget,
)
from .preview import AffectedWorkout, OperationPreview, WorkoutState, preview_operations
from .references import SlotRef, format_slot, parse_slot_ref
from .resolve import ReferenceResolver
from .settings import EngineSettings
from .validate import ValidationResult, validate_operations

__all__ = [
    "ALL_WEEKS",
    "AffectedWorkout",
    "ApplyResult",
    "ChangeIntensity",
    "ChangeWorkoutDistance",
    "ChangeWorkoutType",
    "EngineSettings",
    "FallbackRequest",
    "MoveWorkoutType",
    "OperationExecutor",
    "OperationFailedError",
    "OperationKind",
    "OperationPreview",
    "PlanOperation",
    "PlanOperationsEngine",
    "ReferenceResolver",
    "RemoveWorkoutType",
    "RescheduleWorkout",
    "ScalePhaseVolume",
    "ScaleWeekVolume",
    "ScaleWorkoutDistance",
    "SlotRef",
    "SwapDays",
    "ValidationResult",
    "WeekSelection",
    "WorkoutState",
    "WorkoutTarget",
    "describe_operation",
    "format_slot",
    "parse_slot_ref",
    "preview_operations",
    "validate_operations",
]
