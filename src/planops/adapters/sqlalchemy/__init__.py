"""SQLAlchemy adapter package for planops."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyPlannedWorkoutRepository,
    SqlAlchemyTrainingPlanRepository,
    SqlAlchemyTrainingWeekRepository,
)

__all__ = [
    "SqlAlchemyPlannedWorkoutRepository",
    "SqlAlchemyTrainingPlanRepository",
    "SqlAlchemyTrainingWeekRepository",
    "mapper_registry",
    "start_mappers",
]
