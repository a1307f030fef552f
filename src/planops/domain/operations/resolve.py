"""Resolve symbolic ``W<week>:D<day>`` targets into stable workout ids.

Resolution runs once for the whole batch, before execution reorders anything.
Swaps and moves change which workout sits at a slot, so re-resolving later in the
batch would hit the wrong workout.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from planops.domain.model import date_for_day, make_placeholder
from planops.domain.operations.model import TARGETED_OPERATION_TYPES
from planops.domain.operations.references import parse_slot_ref

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from planops.domain.model import ScheduleSnapshot
    from planops.domain.operations.model import PlanOperation
    from planops.domain.ports import PlanUnitOfWork

log = getLogger(__name__)


class ReferenceResolver:
    """Map slot references of one plan to workout ids, creating placeholders on demand."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], PlanUnitOfWork],
        *,
        plan_id: UUID,
        snapshot: ScheduleSnapshot,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self.plan_id = plan_id
        self.snapshot = snapshot

    def ensure_workout(self, uow: PlanUnitOfWork, reference: str) -> UUID | None:
        """Return the id of the workout at ``reference``, creating a rest placeholder if empty.

        Looks at the persisted state, not the snapshot. Returns ``None`` for malformed
        references and unknown weeks.
        """

        slot = parse_slot_ref(reference)
        if slot is None or not slot.in_range:
            log.warning(f"Cannot resolve workout reference {reference!r}: malformed")
            return None

        repositories = uow.repositories
        week = repositories.weeks.get_by_number(self.plan_id, slot.week_number)
        if week is None:
            log.warning(f"Cannot resolve workout reference {reference}: week not found")
            return None

        existing = repositories.workouts.find_in_slot(week.id, slot.day)
        if existing is not None:
            return existing.id

        snapshot_week = self.snapshot.week(slot.week_number)
        week_start = snapshot_week.start_date if snapshot_week is not None else week.start_date
        placeholder = make_placeholder(
            week=week,
            day=slot.day,
            scheduled_date=date_for_day(week_start, slot.day),
        )
        repositories.workouts.add(placeholder)
        log.info(
            f"Created placeholder workout {placeholder.id} at {slot} "
            f"({placeholder.scheduled_date.isoformat()})"
        )
        return placeholder.id

    def resolve_operations(self, operations: Sequence[PlanOperation]) -> list[PlanOperation]:
        """Return ``operations`` with every slot target carrying a workout id.

        Targets that cannot be resolved are returned unchanged; execution reports them.
        Placeholders are committed before this returns.
        """

        resolved: list[PlanOperation] = []
        with self._unit_of_work_factory() as uow:
            resolved.extend(self._resolve_target(uow, operation) for operation in operations)
            uow.commit()
        return resolved

    def _resolve_target(self, uow: PlanUnitOfWork, operation: PlanOperation) -> PlanOperation:
        if not isinstance(operation, TARGETED_OPERATION_TYPES):
            return operation
        target = operation.target
        if target.workout_id is not None or target.slot is None:
            return operation
        workout_id = self.ensure_workout(uow, target.slot)
        if workout_id is None:
            return operation
        return replace(operation, target=target.resolved(workout_id))
