"""Plan-operations engine settings loaded from the environment."""

from __future__ import annotations

import os

from planops.domain.model import DistanceUnit
from planops.domain.operations.settings import EngineSettings

from .env import optional_env_float
from .errors import ConfigurationError


def _distance_unit() -> DistanceUnit:
    raw = os.getenv("PLANOPS_DISTANCE_UNIT")
    if raw is None or not raw.strip():
        return DistanceUnit.MILES
    try:
        return DistanceUnit(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(unit.value for unit in DistanceUnit)
        raise ConfigurationError(
            f"PLANOPS_DISTANCE_UNIT must be one of {allowed}, got {raw!r}"
        ) from exc


def get_engine_settings() -> EngineSettings:
    defaults = EngineSettings()
    min_factor = optional_env_float("PLANOPS_MIN_FACTOR_WARNING", defaults.min_factor_warning)
    max_factor = optional_env_float("PLANOPS_MAX_FACTOR_WARNING", defaults.max_factor_warning)
    if min_factor > max_factor:
        raise ConfigurationError("PLANOPS_MIN_FACTOR_WARNING must not exceed the maximum")
    return EngineSettings(
        distance_unit=_distance_unit(),
        max_distance_warning_km=optional_env_float(
            "PLANOPS_MAX_DISTANCE_WARNING_KM", defaults.max_distance_warning_km
        ),
        min_factor_warning=min_factor,
        max_factor_warning=max_factor,
    )
