from __future__ import annotations

from datetime import date

from planops.domain.operations import (
    ChangeIntensity,
    ChangeWorkoutDistance,
    ChangeWorkoutType,
    MoveWorkoutType,
    OperationExecutor,
    RemoveWorkoutType,
    RescheduleWorkout,
    ScalePhaseVolume,
    ScaleWeekVolume,
    ScaleWorkoutDistance,
    SwapDays,
    WorkoutTarget,
    preview_operations,
)
from planops.domain.snapshots import load_snapshot
from tests.helpers.schedules import (
    FakePlanStore,
    WorkoutSeed,
    make_snapshot,
    seed_plan,
    standard_layout,
)

SNAPSHOT = make_snapshot(standard_layout(3), phases={1: "Base", 2: "Build", 3: "Build"})


def test_distance_then_race_merge_into_one_slot() -> None:
    previews = preview_operations(
        [
            ChangeWorkoutDistance(target=WorkoutTarget(slot="W2:D4"), new_distance_m=15000),
            ChangeWorkoutType(target=WorkoutTarget(slot="W2:D4"), new_category="race"),
        ],
        SNAPSHOT,
    )

    assert len(previews) == 1
    preview = previews[0]
    assert preview.description == "Change workout W2:D4 distance to 15.0km"
    [affected] = preview.affected
    assert affected.key == (2, 4)
    assert affected.before.category == "easy_run"
    assert affected.before.distance_km == 8.0
    assert affected.after.category == "race"
    assert affected.after.distance_km == 15.0
    assert affected.after.intensity == "hard"
    # Each operation is simulated against the snapshot, so the race label uses 8 km.
    assert affected.after.description == "5.0 mile race"


def test_empty_slot_shows_empty_before_state() -> None:
    layout = standard_layout(1)
    del layout[1][3]
    snapshot = make_snapshot(layout)

    previews = preview_operations(
        [ChangeWorkoutType(target=WorkoutTarget(slot="W1:D3"), new_category="tempo")], snapshot
    )

    [affected] = previews[0].affected
    assert affected.before.description == "Empty"
    assert affected.before.distance_km is None
    assert affected.before.scheduled_date == date(2025, 1, 7)
    assert affected.after.category == "tempo"
    assert affected.after.description == "Tempo run"


def test_second_edit_of_empty_slot_keeps_first_edit() -> None:
    layout = standard_layout(1)
    del layout[1][3]
    snapshot = make_snapshot(layout)

    previews = preview_operations(
        [
            ChangeWorkoutType(target=WorkoutTarget(slot="W1:D3"), new_category="tempo"),
            ChangeWorkoutDistance(target=WorkoutTarget(slot="W1:D3"), new_distance_m=6000),
        ],
        snapshot,
    )

    assert len(previews) == 1
    [affected] = previews[0].affected
    assert affected.after.category == "tempo"
    assert affected.after.description == "Tempo run"
    assert affected.after.distance_km == 6.0


def test_swap_moves_dates_between_days() -> None:
    previews = preview_operations([SwapDays(week_numbers=(1,), day_a=2, day_b=4)], SNAPSHOT)

    affected = {record.key: record for record in previews[0].affected}
    assert set(affected) == {(1, 2), (1, 4)}
    assert affected[1, 2].before.scheduled_date == date(2025, 1, 6)
    assert affected[1, 2].after.scheduled_date == date(2025, 1, 8)
    assert affected[1, 4].after.scheduled_date == date(2025, 1, 6)


def test_swap_of_a_day_with_itself_previews_nothing() -> None:
    assert preview_operations([SwapDays(week_numbers=(1,), day_a=3, day_b=3)], SNAPSHOT) == []


def test_move_reports_displaced_workout() -> None:
    previews = preview_operations(
        [MoveWorkoutType(category="long_run", to_day=1, week_numbers=(1,))], SNAPSHOT
    )

    affected = {record.key: record for record in previews[0].affected}
    assert affected[1, 7].after.scheduled_date == date(2025, 1, 5)
    assert affected[1, 1].before.category == "rest"
    assert affected[1, 1].after.scheduled_date == date(2025, 1, 11)


def test_duplicate_operation_is_dropped_from_preview() -> None:
    operation = ScaleWeekVolume(week_number=1, factor=0.5)

    previews = preview_operations([operation, operation], SNAPSHOT)

    assert len(previews) == 1
    assert previews[0].operation == operation


def test_week_scaling_skips_rest_days() -> None:
    previews = preview_operations([ScaleWeekVolume(week_number=1, factor=1.1)], SNAPSHOT)

    affected = {record.day: record.after.distance_km for record in previews[0].affected}
    assert affected == {2: 8.8, 3: 11.0, 4: 8.8, 6: 9.9, 7: 22.0}


def test_phase_scaling_covers_every_phase_week() -> None:
    previews = preview_operations([ScalePhaseVolume(phase_name="build", factor=0.5)], SNAPSHOT)

    weeks = {record.week_number for record in previews[0].affected}
    assert weeks == {2, 3}


def test_remove_replaces_category_in_selected_weeks() -> None:
    previews = preview_operations(
        [RemoveWorkoutType(category="intervals", replacement="easy_run", week_numbers=(3,))],
        SNAPSHOT,
    )

    [affected] = previews[0].affected
    assert affected.key == (3, 6)
    assert affected.after.category == "easy_run"


def test_scaling_a_workout_without_distance_previews_nothing() -> None:
    snapshot = make_snapshot({1: {5: WorkoutSeed("cross_training")}})

    previews = preview_operations(
        [ScaleWorkoutDistance(target=WorkoutTarget(slot="W1:D5"), factor=1.5)], snapshot
    )

    assert previews == []


def test_preview_by_workout_id(plan_store: FakePlanStore) -> None:
    seeded = seed_plan(plan_store.unit_of_work, standard_layout(2))
    with plan_store.unit_of_work() as uow:
        snapshot = load_snapshot(uow, seeded.plan_id)

    target = WorkoutTarget(workout_id=seeded.workout_ids["W2:D6"])
    previews = preview_operations(
        [ChangeIntensity(target=target, new_intensity="easy")], snapshot
    )

    [affected] = previews[0].affected
    assert affected.key == (2, 6)
    assert affected.before.intensity == "hard"
    assert affected.after.intensity == "easy"



def test_swap_exchanges_rescheduled_dates(plan_store: FakePlanStore) -> None:
    seeded = seed_plan(plan_store.unit_of_work, standard_layout(1))
    target = WorkoutTarget(workout_id=seeded.workout_ids["W1:D2"])
    OperationExecutor(plan_store.unit_of_work, plan_id=seeded.plan_id).execute(
        [RescheduleWorkout(target=target, new_date="2025-01-09")]
    )
    with plan_store.unit_of_work() as uow:
        snapshot = load_snapshot(uow, seeded.plan_id)

    previews = preview_operations([SwapDays(week_numbers=(1,), day_a=2, day_b=4)], snapshot)

    affected = {record.key: record for record in previews[0].affected}
    assert affected[1, 2].after.scheduled_date == date(2025, 1, 8)
    assert affected[1, 4].after.scheduled_date == date(2025, 1, 9)


def test_descriptions_use_the_plan_week_start() -> None:
    snapshot = make_snapshot(standard_layout(1), week_starts_on=1)

    previews = preview_operations([SwapDays(week_numbers=(1,), day_a=1, day_b=2)], snapshot)

    assert previews[0].description == "Swap Monday and Tuesday in weeks 1"
