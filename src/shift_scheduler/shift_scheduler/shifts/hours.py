from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union

from ..common.datetime_utils import end_of_day, start_of_day
from ..common.validators import parse_shift_type
from ..core.enums import ShiftType
from .timetable import times_for


@dataclass(frozen=True)
class ShiftSpan:
    start: datetime
    end: datetime

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


def shift_span(shift_type: Union[ShiftType, str], work_date: date) -> ShiftSpan:
    """Start/end timestamps of a shift on ``work_date``.

    Leave types span the full calendar day. A night shift whose end clock time
    is earlier than its start finishes on the next day.
    """

    shift_type = parse_shift_type(shift_type)
    if shift_type.is_leave:
        return ShiftSpan(start=start_of_day(work_date), end=end_of_day(work_date))

    times = times_for(shift_type)
    start = datetime.combine(work_date, times.start)
    end = datetime.combine(work_date, times.end)
    if shift_type == ShiftType.NIGHT and end < start:
        end += timedelta(days=1)
    return ShiftSpan(start=start, end=end)


def hours_worked(shift_type: Union[ShiftType, str], work_date: date) -> float:
    shift_type = parse_shift_type(shift_type)
    if shift_type.is_leave:
        return 0.0
    return shift_span(shift_type, work_date).hours
