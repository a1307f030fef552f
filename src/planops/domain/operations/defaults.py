"""Category smart defaults and distance arithmetic shared by preview and execution."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from planops.domain.model import DistanceUnit, Intensity, WorkoutCategory

KM_PER_MILE: Final = 1.60934


@dataclass(frozen=True, slots=True)
class CategoryDefaults:
    """Fields derived from a target category when no explicit description is given."""

    description: str
    intensity: str | None = None
    distance_m: int | None = None
    clears_duration: bool = False


_STATIC_DEFAULTS: Final[dict[str, CategoryDefaults]] = {
    WorkoutCategory.LONG_RUN: CategoryDefaults("Long run", Intensity.MODERATE),
    WorkoutCategory.TEMPO: CategoryDefaults("Tempo run", Intensity.HARD),
    WorkoutCategory.INTERVALS: CategoryDefaults("Interval training", Intensity.HARD),
    WorkoutCategory.SPEED: CategoryDefaults("Interval training", Intensity.HARD),
    WorkoutCategory.EASY_RUN: CategoryDefaults("Easy run", Intensity.EASY),
    WorkoutCategory.EASY: CategoryDefaults("Easy run", Intensity.EASY),
    WorkoutCategory.REST: CategoryDefaults(
        "Rest day", Intensity.EASY, distance_m=0, clears_duration=True
    ),
    WorkoutCategory.RECOVERY: CategoryDefaults("Recovery", Intensity.EASY),
    WorkoutCategory.PROGRESSION: CategoryDefaults("Progression run", Intensity.MODERATE),
    WorkoutCategory.CROSS_TRAINING: CategoryDefaults("Cross training", Intensity.EASY),
}


def category_defaults(
    category: str,
    *,
    current_distance_km: float | None,
    unit: DistanceUnit = DistanceUnit.MILES,
) -> CategoryDefaults:
    """Return the smart defaults for switching a workout to ``category``.

    Race descriptions are derived from the workout's *current* distance, so callers
    must apply distance changes first.
    """

    if category == WorkoutCategory.RACE:
        if current_distance_km:
            return CategoryDefaults(
                f"{format_distance(current_distance_km, unit)} race", Intensity.HARD
            )
        return CategoryDefaults("Race", Intensity.HARD)
    static = _STATIC_DEFAULTS.get(category)
    if static is not None:
        return static
    return CategoryDefaults(category)


def format_distance(distance_km: float, unit: DistanceUnit) -> str:
    if unit == DistanceUnit.MILES:
        return f"{distance_km / KM_PER_MILE:.1f} mile"
    return f"{distance_km:.1f} km"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def scale_distance_m(distance_m: float, factor: float) -> int:
    """Multiply a distance and round to the nearest whole metre."""

    return round_half_up(distance_m * factor)


def km_to_m(distance_km: float) -> int:
    return round_half_up(distance_km * 1000)
