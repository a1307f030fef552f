from __future__ import annotations

import json
from uuid import uuid4

import pytest

from planops.adapters.llm import OperationParseError, parse_operations, parse_tool_calls
from planops.domain.operations import (
    ALL_WEEKS,
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


def test_parse_camel_case_tool_payload() -> None:
    payload = json.dumps(
        [
            {"op": "swap_days", "weekNumbers": [1, 2], "dayA": 2, "dayB": 4},
            {
                "op": "move_workout_type",
                "workoutType": "long_run",
                "toDay": 7,
                "weekNumbers": "all",
            },
            {"op": "reschedule_workout", "workoutIndex": "W3:D2", "newDate": "2025-01-22"},
            {"op": "scale_workout_distance", "workoutIndex": "W3:D6", "factor": 1.1},
            {
                "op": "remove_workout_type",
                "workoutType": "intervals",
                "replacement": "easy_run",
                "weekNumbers": [5],
            },
            {"op": "scale_week_volume", "weekNumber": 4, "factor": 0.8},
            {"op": "scale_phase_volume", "phaseName": "Taper", "factor": 0.7},
        ]
    )

    operations = parse_operations(payload)

    assert operations == [
        SwapDays(week_numbers=(1, 2), day_a=2, day_b=4),
        MoveWorkoutType(category="long_run", to_day=7, week_numbers=ALL_WEEKS),
        RescheduleWorkout(target=WorkoutTarget(slot="W3:D2"), new_date="2025-01-22"),
        ScaleWorkoutDistance(target=WorkoutTarget(slot="W3:D6"), factor=1.1),
        RemoveWorkoutType(category="intervals", replacement="easy_run", week_numbers=(5,)),
        ScaleWeekVolume(week_number=4, factor=0.8),
        ScalePhaseVolume(phase_name="Taper", factor=0.7),
    ]


def test_parse_single_mapping_with_workout_id() -> None:
    workout_id = uuid4()

    operations = parse_operations(
        {
            "op": "change_workout_type",
            "workoutId": str(workout_id),
            "newType": "rest",
            "newDescription": "Travel day",
        }
    )

    assert operations == [
        ChangeWorkoutType(
            target=WorkoutTarget(workout_id=workout_id),
            new_category="rest",
            new_description="Travel day",
        )
    ]


def test_out_of_range_values_are_left_to_validation() -> None:
    operations = parse_operations({"op": "swap_days", "weekNumbers": [1], "dayA": 9, "dayB": 1})

    assert operations == [SwapDays(week_numbers=(1,), day_a=9, day_b=1)]


def test_fallback_wins_over_other_calls() -> None:
    result = parse_operations(
        [
            {"op": "scale_week_volume", "weekNumber": 4, "factor": 0.8},
            {"op": "request_fallback", "reason": "Rebuild the whole plan for a new race date"},
        ]
    )

    assert result == FallbackRequest(reason="Rebuild the whole plan for a new race date")


def test_provider_tool_calls_with_string_arguments() -> None:
    operations = parse_tool_calls(
        [
            {
                "name": "change_workout_distance",
                "arguments": '{"workoutIndex": "W2:D4", "newDistanceMeters": 15000}',
            },
            {
                "name": "change_workout_type",
                "arguments": {"workoutIndex": "W2:D4", "newType": "race"},
            },
        ]
    )

    assert operations == [
        ChangeWorkoutDistance(target=WorkoutTarget(slot="W2:D4"), new_distance_m=15000),
        ChangeWorkoutType(target=WorkoutTarget(slot="W2:D4"), new_category="race"),
    ]


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '[{"op": "teleport_workout"}]',
        {"op": "swap_days", "weekNumbers": [1], "dayA": 1},
        {"op": "scale_week_volume", "weekNumber": 1, "factor": 0.8, "unexpected": True},
        {"op": "swap_days", "weekNumbers": "some", "dayA": 1, "dayB": 2},
    ],
)
def test_invalid_payloads_raise(payload: object) -> None:
    with pytest.raises(OperationParseError):
        parse_operations(payload)


def test_tool_call_without_name_raises() -> None:
    with pytest.raises(OperationParseError, match="has no name"):
        parse_tool_calls([{"arguments": {}}])


def test_tool_call_with_malformed_arguments_raises() -> None:
    with pytest.raises(OperationParseError, match="malformed arguments"):
        parse_tool_calls([{"name": "swap_days", "arguments": "{"}])
