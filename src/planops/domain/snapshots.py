"""Build read-only schedule snapshots from the persistent store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from planops.domain.model import ScheduleSnapshot, SnapshotWeek, SnapshotWorkout

if TYPE_CHECKING:
    from uuid import UUID

    from planops.domain.model import PlannedWorkout, TrainingWeek
    from planops.domain.ports import PlanUnitOfWork


class PlanNotFoundError(LookupError):
    """Raised when a training plan id does not exist in the store."""

    def __init__(self, plan_id: UUID) -> None:
        super().__init__(f"Training plan {plan_id} not found")
        self.plan_id = plan_id


def load_snapshot(uow: PlanUnitOfWork, plan_id: UUID) -> ScheduleSnapshot:
    """Read the current state of ``plan_id`` into a detached snapshot.

    Must be called inside an entered unit of work; nothing is written.
    """

    repositories = uow.repositories
    plan = repositories.plans.get(plan_id)
    if plan is None:
        raise PlanNotFoundError(plan_id)

    weeks = sorted(repositories.weeks.list_for_plan(plan_id), key=lambda week: week.week_number)
    return ScheduleSnapshot(
        plan_id=plan.id,
        week_starts_on=plan.week_starts_on,
        weeks=tuple(
            _snapshot_week(week, repositories.workouts.list_for_week(week.id)) for week in weeks
        ),
    )


def _snapshot_week(week: TrainingWeek, workouts: list[PlannedWorkout]) -> SnapshotWeek:
    return SnapshotWeek(
        week_number=week.week_number,
        start_date=week.start_date,
        phase_name=week.phase_name,
        workouts=tuple(
            SnapshotWorkout(
                day=workout.day,
                category=workout.category,
                description=workout.description,
                distance_km=workout.distance_km,
                scheduled_date=workout.scheduled_date,
                intensity=workout.intensity,
                workout_id=workout.id,
            )
            for workout in sorted(workouts, key=lambda item: item.day)
        ),
    )
