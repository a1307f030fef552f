"""Symbolic ``W<week>:D<day>`` slot references."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Final

from planops.domain.model import DAYS_PER_WEEK

SLOT_PATTERN: Final = re.compile(r"^W(\d+):D(\d+)$", re.IGNORECASE)
ISO_DATE_PATTERN: Final = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True, slots=True)
class SlotRef:
    week_number: int
    day: int

    def __str__(self) -> str:
        return format_slot(self.week_number, self.day)

    @property
    def in_range(self) -> bool:
        return self.week_number >= 1 and 1 <= self.day <= DAYS_PER_WEEK


def parse_slot_ref(value: str) -> SlotRef | None:
    """Parse ``W14:D6`` (case-insensitive); return ``None`` when the format does not match."""

    match = SLOT_PATTERN.match(value.strip())
    if match is None:
        return None
    return SlotRef(week_number=int(match.group(1)), day=int(match.group(2)))


def format_slot(week_number: int, day: int) -> str:
    return f"W{week_number}:D{day}"


def is_valid_day(day: int) -> bool:
    return 1 <= day <= DAYS_PER_WEEK


def parse_iso_date(value: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` date, returning ``None`` for anything else."""

    if not ISO_DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
