"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class WorkoutCategory(StrEnum):
    """Known workout categories.

    Persisted categories are plain strings; this enum is the vocabulary the
    validator checks against, not a closed set.
    """

    REST = "rest"
    RECOVERY = "recovery"
    EASY = "easy"
    EASY_RUN = "easy_run"
    LONG_RUN = "long_run"
    PROGRESSION = "progression"
    TEMPO = "tempo"
    INTERVALS = "intervals"
    SPEED = "speed"
    RACE = "race"
    CROSS_TRAINING = "cross_training"


class Intensity(StrEnum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


class WorkoutStatus(StrEnum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class PlanStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class DistanceUnit(StrEnum):
    KILOMETERS = "km"
    MILES = "mi"
