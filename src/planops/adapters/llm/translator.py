"""Translate language-model tool calls into domain plan operations."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from planops.domain.operations import (
    ALL_WEEKS,
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    FallbackRequest,
    MoveWorkoutType,
    RemoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    WorkoutTarget,
)

from .schema import (
    OPERATION_CALLS_ADAPTER,
    ChangeIntensityCall,
    ChangeWorkoutDistanceCall,
    ChangeWorkoutTypeCall,
    MoveWorkoutTypeCall,
    RemoveWorkoutTypeCall,
    RequestFallbackCall,
    RescheduleWorkoutCall,
    ScalePhaseVolumeCall,
    ScaleWeekVolumeCall,
    ScaleWorkoutDistanceCall,
    SwapDaysCall,
    TargetedToolModel,
)

if TYPE_CHECKING:
    from planops.domain.operations import PlanOperation, WeekSelection

    from .schema import OperationCall

log = getLogger(__name__)


class OperationParseError(ValueError):
    """Raised when a tool-call payload does not describe valid operations."""


def parse_operations(payload: object) -> list[PlanOperation] | FallbackRequest:
    """Parse tool-call output into operations.

    ``payload`` is a JSON string, a list of ``{"op": ..., **arguments}`` mappings, or
    a single such mapping. A ``request_fallback`` call anywhere in the payload wins
    over every other call.
    """

    calls = _validate(payload)
    for call in calls:
        if isinstance(call, RequestFallbackCall):
            log.info(f"Language model requested fallback: {call.reason}")
            return FallbackRequest(reason=call.reason)
    return [to_operation(call) for call in calls]


def parse_tool_calls(
    tool_calls: Sequence[Mapping[str, object]],
) -> list[PlanOperation] | FallbackRequest:
    """Parse provider tool calls of the form ``{"name": ..., "arguments": {...}}``.

    ``arguments`` may itself be a JSON-encoded string, as several providers send it.
    """

    payload: list[dict[str, object]] = []
    for index, tool_call in enumerate(tool_calls):
        name = tool_call.get("name")
        if not isinstance(name, str):
            raise OperationParseError(f"Tool call {index} has no name")
        arguments = tool_call.get("arguments") or {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as exc:
                raise OperationParseError(
                    f"Tool call {index} ({name}) has malformed arguments: {exc}"
                ) from exc
        if not isinstance(arguments, Mapping):
            raise OperationParseError(f"Tool call {index} ({name}) arguments must be an object")
        payload.append({**cast(Mapping[str, object], arguments), "op": name})
    return parse_operations(payload)


def _validate(payload: object) -> list[OperationCall]:
    if isinstance(payload, bytes):
        payload = payload.decode()
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise OperationParseError(f"Operation payload is not valid JSON: {exc}") from exc
    if isinstance(payload, Mapping):
        payload = [payload]
    try:
        return OPERATION_CALLS_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise OperationParseError(f"Invalid operation payload: {exc}") from exc


def _target(call: TargetedToolModel) -> WorkoutTarget:
    return WorkoutTarget(slot=call.workout_index, workout_id=call.workout_id)


def _weeks(value: list[int] | str) -> WeekSelection:
    if value == ALL_WEEKS:
        return ALL_WEEKS
    return tuple(cast(list[int], value))


def to_operation(call: OperationCall) -> PlanOperation:  # noqa: PLR0911
    """Convert one validated tool call into its domain operation."""

    if isinstance(call, SwapDaysCall):
        return SwapDays(week_numbers=_weeks(call.week_numbers), day_a=call.day_a, day_b=call.day_b)
    if isinstance(call, MoveWorkoutTypeCall):
        return MoveWorkoutType(
            category=call.workout_type,
            to_day=call.to_day,
            week_numbers=_weeks(call.week_numbers),
        )
    if isinstance(call, RescheduleWorkoutCall):
        return RescheduleWorkout(target=_target(call), new_date=call.new_date)
    if isinstance(call, ChangeWorkoutTypeCall):
        return ChangeWorkoutType(
            target=_target(call),
            new_category=call.new_type,
            new_description=call.new_description,
        )
    if isinstance(call, ChangeWorkoutDistanceCall):
        return ChangeWorkoutDistance(target=_target(call), new_distance_m=call.new_distance_meters)
    if isinstance(call, ScaleWorkoutDistanceCall):
        return ScaleWorkoutDistance(target=_target(call), factor=call.factor)
    if isinstance(call, ChangeIntensityCall):
        return ChangeIntensity(target=_target(call), new_intensity=call.new_intensity)
    if isinstance(call, RemoveWorkoutTypeCall):
        return RemoveWorkoutType(
            category=call.workout_type,
            replacement=call.replacement,
            week_numbers=_weeks(call.week_numbers),
        )
    if isinstance(call, ScaleWeekVolumeCall):
        return ScaleWeekVolume(week_number=call.week_number, factor=call.factor)
    if isinstance(call, ScalePhaseVolumeCall):
        return ScalePhaseVolume(phase_name=call.phase_name, factor=call.factor)
    raise OperationParseError(f"Tool call {call.op!r} does not describe an operation")
