from __future__ import annotations

from planops.domain.operations import (
    ALL_WEEKS,
    ChangeWorkoutDistance,
    MoveWorkoutType,
    ScalePhaseVolume,
    ScaleWeekVolume,
    SwapDays,
    WorkoutTarget,
    describe_operation,
)
from planops.domain.operations.describe import day_name


def test_day_name_depends_on_week_start() -> None:
    assert day_name(1) == "Sunday"
    assert day_name(1, week_starts_on=1) == "Monday"
    assert day_name(7, week_starts_on=1) == "Sunday"


def test_describe_swap_uses_day_names_and_weeks() -> None:
    operation = SwapDays(week_numbers=(1, 2), day_a=2, day_b=4)

    assert describe_operation(operation) == "Swap Monday and Wednesday in weeks 1, 2"


def test_describe_move_for_all_weeks() -> None:
    operation = MoveWorkoutType(category="long_run", to_day=7, week_numbers=ALL_WEEKS)

    assert describe_operation(operation, week_starts_on=1) == (
        "Move long_run workouts to Sunday in all weeks"
    )


def test_describe_distance_and_scaling() -> None:
    target = WorkoutTarget(slot="W2:D4")

    assert describe_operation(ChangeWorkoutDistance(target=target, new_distance_m=15000)) == (
        "Change workout W2:D4 distance to 15.0km"
    )
    assert describe_operation(ScaleWeekVolume(week_number=3, factor=0.8)) == (
        "Scale week 3 volume by 80%"
    )
    assert describe_operation(ScalePhaseVolume(phase_name="Taper", factor=1.1)) == (
        "Scale Taper phase volume by 110%"
    )
