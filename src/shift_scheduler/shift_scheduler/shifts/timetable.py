"""Fixed clock times of the working shift types.

Leave codes have no entry here; they cover the whole calendar day and that
convention lives in ``hours.shift_span``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from types import MappingProxyType
from typing import Mapping, Union

from ..core.enums import ShiftType
from ..core.exceptions import UnknownShiftType


@dataclass(frozen=True)
class ShiftTime:
    start: time
    end: time


SHIFT_TIMES: Mapping[ShiftType, ShiftTime] = MappingProxyType(
    {
        ShiftType.MORNING: ShiftTime(start=time(6, 48), end=time(15, 0)),
        ShiftType.AFTERNOON: ShiftTime(start=time(14, 48), end=time(23, 0)),
        # Ends on the following day.
        ShiftType.NIGHT: ShiftTime(start=time(22, 48), end=time(7, 0)),
        ShiftType.DAY: ShiftTime(start=time(9, 0), end=time(18, 0)),
    }
)

SHIFT_NAMES: Mapping[ShiftType, str] = MappingProxyType(
    {
        ShiftType.MORNING: "Morning Shift",
        ShiftType.AFTERNOON: "Afternoon Shift",
        ShiftType.NIGHT: "Night Shift",
        ShiftType.DAY: "Day Shift",
        ShiftType.PAID_LEAVE: "Paid Leave",
        ShiftType.SICK_LEAVE: "Sick Leave",
        ShiftType.COMPENSATION: "Compensation",
        ShiftType.NATIONAL_HOLIDAY: "National Holiday",
    }
)


def times_for(shift_type: Union[ShiftType, str]) -> ShiftTime:
    try:
        return SHIFT_TIMES[ShiftType(shift_type)]
    except (KeyError, ValueError):
        raise UnknownShiftType(f"No shift times defined for {getattr(shift_type, 'value', shift_type)!r}")


def shift_name(shift_type: Union[ShiftType, str]) -> str:
    try:
        return SHIFT_NAMES[ShiftType(shift_type)]
    except ValueError:
        return "Unknown Shift"
