from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.enums import REQUIRED_DAILY_SHIFTS, ShiftType
from .model import Shift


@dataclass(frozen=True)
class DayCompleteness:
    is_complete: bool
    missing_types: tuple[ShiftType, ...]


def check_day(shifts_on_date: Iterable[Shift]) -> DayCompleteness:
    """Whether the morning, afternoon and night shifts are all staffed on a date."""

    present = {s.shift_type for s in shifts_on_date}
    missing = tuple(t for t in REQUIRED_DAILY_SHIFTS if t not in present)
    return DayCompleteness(is_complete=not missing, missing_types=missing)
