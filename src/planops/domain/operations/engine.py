"""Facade tying validation, preview, resolution and execution together."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from planops.domain.operations.execute import ApplyResult, OperationExecutor
from planops.domain.operations.preview import preview_operations
from planops.domain.operations.resolve import ReferenceResolver
from planops.domain.operations.settings import EngineSettings
from planops.domain.operations.validate import validate_operations

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from planops.domain.model import ScheduleSnapshot
    from planops.domain.operations.model import PlanOperation
    from planops.domain.operations.preview import OperationPreview
    from planops.domain.operations.validate import ValidationResult
    from planops.domain.ports import PlanUnitOfWork

log = getLogger(__name__)


class PlanOperationsEngine:
    """Validate and preview batches against a snapshot, then apply them to the store.

    ``validate`` and ``preview`` are side-effect free and may be called any number
    of times. ``apply`` validates again, resolves slot references once, then runs
    the executor.
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], PlanUnitOfWork],
        settings: EngineSettings | None = None,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self.settings = settings or EngineSettings()

    def validate(
        self, operations: Sequence[PlanOperation], snapshot: ScheduleSnapshot
    ) -> ValidationResult:
        return validate_operations(operations, snapshot, settings=self.settings)

    def preview(
        self, operations: Sequence[PlanOperation], snapshot: ScheduleSnapshot
    ) -> list[OperationPreview]:
        return preview_operations(operations, snapshot, settings=self.settings)

    def apply(
        self,
        operations: Sequence[PlanOperation],
        snapshot: ScheduleSnapshot,
        *,
        plan_id: UUID | None = None,
    ) -> ApplyResult:
        effective_plan_id = plan_id or snapshot.plan_id
        if effective_plan_id is None:
            raise ValueError("A plan id is required to apply operations")

        validation = self.validate(operations, snapshot)
        if not validation.valid:
            log.info(f"Rejected batch of {len(operations)} operations: {validation.errors}")
            return ApplyResult(success=False, errors=list(validation.errors))

        resolver = ReferenceResolver(
            self._unit_of_work_factory, plan_id=effective_plan_id, snapshot=snapshot
        )
        try:
            resolved = resolver.resolve_operations(operations)
        except Exception as exc:  # noqa: BLE001
            log.warning(f"Failed to resolve workout references: {exc}")
            return ApplyResult(success=False, errors=[f"Reference resolution failed: {exc}"])

        executor = OperationExecutor(
            self._unit_of_work_factory, plan_id=effective_plan_id, settings=self.settings
        )
        return executor.execute(resolved)
