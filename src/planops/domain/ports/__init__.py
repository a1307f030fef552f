"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    PlannedWorkoutRepository,
    Repository,
    TrainingPlanRepository,
    TrainingWeekRepository,
)
from .unit_of_work import PlanRepositories, PlanUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "PlanRepositories",
    "PlanUnitOfWork",
    "PlannedWorkoutRepository",
    "Repository",
    "RepositoryCollection",
    "TrainingPlanRepository",
    "TrainingWeekRepository",
    "UnitOfWork",
]
