from __future__ import annotations

from datetime import date

import pytest

from planops.domain.operations.references import (
    SlotRef,
    format_slot,
    parse_iso_date,
    parse_slot_ref,
)


def test_parse_slot_ref_reads_week_and_day() -> None:
    assert parse_slot_ref("W14:D6") == SlotRef(week_number=14, day=6)


def test_parse_slot_ref_is_case_insensitive() -> None:
    assert parse_slot_ref("w2:d4") == SlotRef(week_number=2, day=4)


@pytest.mark.parametrize("value", ["W14-D6", "14:6", "W:D1", "W1:D", "Week1:Day2", ""])
def test_parse_slot_ref_rejects_malformed_values(value: str) -> None:
    assert parse_slot_ref(value) is None


def test_out_of_range_slot_parses_but_is_not_in_range() -> None:
    slot = parse_slot_ref("W1:D9")

    assert slot is not None
    assert not slot.in_range
    assert str(slot) == "W1:D9"


def test_format_slot_round_trips_through_parser() -> None:
    assert parse_slot_ref(format_slot(5, 3)) == SlotRef(week_number=5, day=3)


def test_parse_iso_date_is_strict() -> None:
    assert parse_iso_date("2025-03-10") == date(2025, 3, 10)
    assert parse_iso_date("2025-3-10") is None
    assert parse_iso_date("2025-02-30") is None
    assert parse_iso_date("next tuesday") is None
