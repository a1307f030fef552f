from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from planops.adapters.plan_document import PlanDocument


def _document(**overrides: object) -> dict[str, object]:
    document: dict[str, object] = {
        "name": "Spring 10k",
        "startDate": "2025-03-02",
        "weeks": [
            {
                "weekNumber": 1,
                "volumeTargetMeters": 30000,
                "workouts": [{"day": 2, "category": "easy_run", "distanceMeters": 6000}],
            },
            {"weekNumber": 2, "startDate": "2025-03-10", "workouts": []},
        ],
    }
    document.update(overrides)
    return document


def test_document_parses_aliases_and_week_starts() -> None:
    document = PlanDocument.model_validate(_document())

    first, second = document.weeks
    assert document.week_starts_on == 0
    assert first.volume_target_m == 30000
    assert first.workouts[0].distance_m == 6000
    assert document.week_start(first) == date(2025, 3, 2)
    assert document.week_start(second) == date(2025, 3, 10)


def test_duplicate_week_numbers_are_rejected() -> None:
    weeks = [{"weekNumber": 1}, {"weekNumber": 1}]

    with pytest.raises(ValidationError, match="Week numbers must be unique"):
        PlanDocument.model_validate(_document(weeks=weeks))


def test_two_workouts_on_one_day_are_rejected() -> None:
    weeks = [
        {
            "weekNumber": 1,
            "workouts": [{"day": 3, "category": "tempo"}, {"day": 3, "category": "rest"}],
        }
    ]

    with pytest.raises(ValidationError, match="more than one workout on a day"):
        PlanDocument.model_validate(_document(weeks=weeks))


@pytest.mark.parametrize("day", [0, 8])
def test_workout_day_must_be_in_week(day: int) -> None:
    weeks = [{"weekNumber": 1, "workouts": [{"day": day, "category": "tempo"}]}]

    with pytest.raises(ValidationError):
        PlanDocument.model_validate(_document(weeks=weeks))
