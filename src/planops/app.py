"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from planops.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyPlanUnitOfWork,
    is_started,
    startup,
)
from planops.config import get_engine_settings
from planops.domain.model import PlannedWorkout, TrainingPlan, TrainingWeek, date_for_day
from planops.domain.operations import PlanOperationsEngine
from planops.domain.ports.unit_of_work import PlanUnitOfWork
from planops.domain.snapshots import load_snapshot

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from planops.adapters.plan_document import PlanDocument
    from planops.domain.model import ScheduleSnapshot
    from planops.domain.operations import (
        ApplyResult,
        EngineSettings,
        OperationPreview,
        PlanOperation,
        ValidationResult,
    )

UnitOfWorkFactory = Callable[[], PlanUnitOfWork]


log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyPlanUnitOfWork


def _engine(
    factory: UnitOfWorkFactory, settings: EngineSettings | None
) -> PlanOperationsEngine:
    return PlanOperationsEngine(factory, settings or get_engine_settings())


def load_plan_snapshot(
    plan_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ScheduleSnapshot:
    """Read a fresh snapshot of ``plan_id`` from the store."""

    factory = _unit_of_work_factory(unit_of_work_factory)
    with factory() as uow:
        return load_snapshot(uow, plan_id)


def validate_plan_operations(
    plan_id: UUID,
    operations: Sequence[PlanOperation],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: EngineSettings | None = None,
) -> ValidationResult:
    factory = _unit_of_work_factory(unit_of_work_factory)
    snapshot = load_plan_snapshot(plan_id, unit_of_work_factory=factory)
    return _engine(factory, settings).validate(operations, snapshot)


def preview_plan_operations(
    plan_id: UUID,
    operations: Sequence[PlanOperation],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: EngineSettings | None = None,
) -> list[OperationPreview]:
    factory = _unit_of_work_factory(unit_of_work_factory)
    snapshot = load_plan_snapshot(plan_id, unit_of_work_factory=factory)
    return _engine(factory, settings).preview(operations, snapshot)


def apply_plan_operations(
    plan_id: UUID,
    operations: Sequence[PlanOperation],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: EngineSettings | None = None,
) -> ApplyResult:
    """Apply ``operations`` to ``plan_id`` against a freshly loaded snapshot."""

    factory = _unit_of_work_factory(unit_of_work_factory)
    snapshot = load_plan_snapshot(plan_id, unit_of_work_factory=factory)
    log.info(f"Applying {len(operations)} operations to plan {plan_id}")
    result = _engine(factory, settings).apply(operations, snapshot, plan_id=plan_id)
    log.info(
        f"Finished applying operations: success={result.success}, "
        f"applied={result.operations_applied}, modified={result.workouts_modified}"
    )
    return result


def import_plan(
    document: PlanDocument,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TrainingPlan:
    """Persist a plan described by an imported document and return it."""

    factory = _unit_of_work_factory(unit_of_work_factory)
    plan = TrainingPlan(
        name=document.name,
        start_date=document.start_date,
        week_starts_on=document.week_starts_on,
    )
    with factory() as uow:
        repositories = uow.repositories
        repositories.plans.add(plan)
        for week_document in document.weeks:
            week = TrainingWeek(
                plan_id=plan.id,
                week_number=week_document.week_number,
                start_date=document.week_start(week_document),
                phase_name=week_document.phase_name,
                volume_target_m=week_document.volume_target_m,
            )
            repositories.weeks.add(week)
            for workout in week_document.workouts:
                repositories.workouts.add(
                    PlannedWorkout(
                        week_id=week.id,
                        day=workout.day,
                        scheduled_date=date_for_day(week.start_date, workout.day),
                        category=workout.category,
                        description=workout.description,
                        distance_m=workout.distance_m,
                        duration_s=workout.duration_s,
                        intensity=workout.intensity,
                    )
                )
        uow.commit()
    log.info(f"Imported plan {plan.id} ({plan.name}) with {len(document.weeks)} weeks")
    return plan
