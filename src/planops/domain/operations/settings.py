"""Tunable thresholds and display preferences for the operations engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from planops.domain.model import DistanceUnit, WorkoutCategory

DEFAULT_KNOWN_CATEGORIES: frozenset[str] = frozenset(category.value for category in WorkoutCategory)


@dataclass(frozen=True, slots=True)
class EngineSettings:
    distance_unit: DistanceUnit = DistanceUnit.MILES
    max_distance_warning_km: float = 100.0
    min_factor_warning: float = 0.5
    max_factor_warning: float = 2.0
    known_categories: frozenset[str] = field(default=DEFAULT_KNOWN_CATEGORIES)
