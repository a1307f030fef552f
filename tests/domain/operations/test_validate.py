from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from planops.domain.operations import (
    ALL_WEEKS,
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    EngineSettings,
    MoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    WorkoutTarget,
    validate_operations,
)
from tests.helpers.schedules import make_snapshot, standard_layout

if TYPE_CHECKING:
    from planops.domain.operations import PlanOperation

SNAPSHOT = make_snapshot(standard_layout(3), phases={1: "Base", 2: "Base", 3: "Taper"})


def test_valid_batch_has_no_errors_or_warnings() -> None:
    result = validate_operations(
        [
            SwapDays(week_numbers=(1, 2), day_a=2, day_b=4),
            ChangeWorkoutDistance(target=WorkoutTarget(slot="W2:D4"), new_distance_m=15000),
            ChangeWorkoutType(target=WorkoutTarget(slot="W2:D4"), new_category="race"),
            ScalePhaseVolume(phase_name="taper", factor=0.8),
        ],
        SNAPSHOT,
    )

    assert result.valid
    assert result.errors == []
    assert result.warnings == []


def test_invalid_day_is_an_error() -> None:
    result = validate_operations([SwapDays(week_numbers=ALL_WEEKS, day_a=9, day_b=1)], SNAPSHOT)

    assert not result.valid
    assert result.errors == ["swap_days: Invalid day 9"]


def test_missing_week_is_an_error() -> None:
    result = validate_operations(
        [MoveWorkoutType(category="long_run", to_day=1, week_numbers=(2, 8))], SNAPSHOT
    )

    assert result.errors == ["move_workout_type: Week 8 not found"]


@pytest.mark.parametrize(
    ("operation", "message"),
    [
        (ScaleWeekVolume(week_number=1, factor=-1), "scale_week_volume: factor must be positive"),
        (
            ScaleWorkoutDistance(target=WorkoutTarget(slot="W1:D2"), factor=-1),
            "scale_workout_distance: factor must be positive",
        ),
    ],
)
def test_non_positive_factor_is_an_error(operation: PlanOperation, message: str) -> None:
    result = validate_operations([operation], SNAPSHOT)

    assert not result.valid
    assert result.errors == [message]


def test_extreme_factors_only_warn() -> None:
    result = validate_operations(
        [
            ScaleWeekVolume(week_number=1, factor=2.5),
            ScaleWorkoutDistance(target=WorkoutTarget(slot="W1:D2"), factor=0.3),
        ],
        SNAPSHOT,
    )

    assert result.valid
    assert result.warnings == [
        "scale_week_volume: Scaling by more than 2x may be excessive",
        "scale_workout_distance: Scaling to less than 50% may be excessive",
    ]


def test_warning_thresholds_follow_settings() -> None:
    settings = EngineSettings(max_factor_warning=3.0)

    result = validate_operations(
        [ScaleWeekVolume(week_number=1, factor=2.5)], SNAPSHOT, settings=settings
    )

    assert result.warnings == []


def test_bad_date_and_bad_reference_are_errors() -> None:
    result = validate_operations(
        [
            RescheduleWorkout(target=WorkoutTarget(slot="W1:D2"), new_date="03/10/2025"),
            ChangeIntensity(target=WorkoutTarget(slot="week one"), new_intensity="easy"),
        ],
        SNAPSHOT,
    )

    assert result.errors == [
        'reschedule_workout: Invalid date format "03/10/2025"',
        'change_intensity: Invalid workout reference "week one"',
    ]


def test_target_requires_slot_or_id() -> None:
    result = validate_operations(
        [ChangeIntensity(target=WorkoutTarget(), new_intensity="easy")], SNAPSHOT
    )

    assert result.errors == ["change_intensity: No workout id or workout slot provided"]


def test_target_by_id_skips_week_lookup() -> None:
    result = validate_operations(
        [ChangeIntensity(target=WorkoutTarget(workout_id=uuid4()), new_intensity="easy")],
        SNAPSHOT,
    )

    assert result.valid


def test_distance_rules() -> None:
    result = validate_operations(
        [
            ChangeWorkoutDistance(target=WorkoutTarget(slot="W1:D2"), new_distance_m=-5),
            ChangeWorkoutDistance(target=WorkoutTarget(slot="W1:D3"), new_distance_m=150000),
        ],
        SNAPSHOT,
    )

    assert result.errors == ["change_workout_distance: Distance cannot be negative"]
    assert result.warnings == ["change_workout_distance: Distance over 100km seems high"]


def test_unknown_vocabulary_warns() -> None:
    result = validate_operations(
        [
            ChangeWorkoutType(target=WorkoutTarget(slot="W1:D2"), new_category="aqua_jog"),
            ChangeIntensity(target=WorkoutTarget(slot="W1:D2"), new_intensity="brutal"),
        ],
        SNAPSHOT,
    )

    assert result.valid
    assert result.warnings == [
        'change_workout_type: Unknown workout type "aqua_jog"',
        'change_intensity: Unknown intensity "brutal"',
    ]


def test_unknown_phase_is_an_error() -> None:
    result = validate_operations([ScalePhaseVolume(phase_name="Peak", factor=0.9)], SNAPSHOT)

    assert result.errors == ['scale_phase_volume: Phase "Peak" not found']


def test_all_problems_are_reported_in_order() -> None:
    result = validate_operations(
        [
            ScaleWeekVolume(week_number=9, factor=0),
            SwapDays(week_numbers=(1,), day_a=0, day_b=8),
        ],
        SNAPSHOT,
    )

    assert result.errors == [
        "scale_week_volume: Week 9 not found",
        "scale_week_volume: factor must be positive",
        "swap_days: Invalid day 0",
        "swap_days: Invalid day 8",
    ]
