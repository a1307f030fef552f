"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from planops.adapters.sqlalchemy.mappings import planned_workout_table, training_week_table
from planops.domain.model import PlannedWorkout, TrainingPlan, TrainingWeek

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session


class SqlAlchemyRepository[TEntity]:
    """Identity lookups shared by every schedule repository."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyTrainingPlanRepository(SqlAlchemyRepository[TrainingPlan]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, TrainingPlan)


class SqlAlchemyTrainingWeekRepository(SqlAlchemyRepository[TrainingWeek]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, TrainingWeek)

    def get_by_number(self, plan_id: uuid.UUID, week_number: int) -> TrainingWeek | None:
        stmt = (
            select(TrainingWeek)
            .where(training_week_table.c.plan_id == plan_id)
            .where(training_week_table.c.week_number == week_number)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_plan(self, plan_id: uuid.UUID) -> list[TrainingWeek]:
        stmt = (
            select(TrainingWeek)
            .where(training_week_table.c.plan_id == plan_id)
            .order_by(training_week_table.c.week_number)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyPlannedWorkoutRepository(SqlAlchemyRepository[PlannedWorkout]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, PlannedWorkout)

    def find_in_slot(self, week_id: uuid.UUID, day: int) -> PlannedWorkout | None:
        stmt = (
            select(PlannedWorkout)
            .where(planned_workout_table.c.week_id == week_id)
            .where(planned_workout_table.c.day == day)
            .order_by(planned_workout_table.c.scheduled_date)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_week(self, week_id: uuid.UUID) -> list[PlannedWorkout]:
        stmt = (
            select(PlannedWorkout)
            .where(planned_workout_table.c.week_id == week_id)
            .order_by(planned_workout_table.c.day)
        )
        return list(self.session.execute(stmt).scalars())
