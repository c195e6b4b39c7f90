from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.shift_scheduler.shift_scheduler.core.enums import ShiftType
from src.shift_scheduler.shift_scheduler.core.exceptions import UnknownShiftType, ValidationError
from src.shift_scheduler.shift_scheduler.shifts.hours import hours_worked, shift_span
from src.shift_scheduler.shift_scheduler.shifts.timetable import SHIFT_TIMES, shift_name, times_for


@pytest.mark.parametrize(
    "shift_type, expected",
    [
        (ShiftType.MORNING, 8.2),
        (ShiftType.AFTERNOON, 8.2),
        (ShiftType.NIGHT, 8.2),
        (ShiftType.DAY, 9.0),
    ],
)
def test_working_shift_hours(shift_type, expected):
    assert hours_worked(shift_type, date(2024, 3, 5)) == pytest.approx(expected)


@pytest.mark.parametrize("code", ["PL", "SL", "C", "NH"])
def test_leave_codes_count_zero_hours(code):
    assert hours_worked(code, date(2024, 3, 5)) == 0.0


def test_night_shift_ends_next_day():
    span = shift_span(ShiftType.NIGHT, date(2024, 2, 29))

    assert span.start == datetime(2024, 2, 29, 22, 48)
    assert span.end == datetime(2024, 3, 1, 7, 0)


def test_leave_span_covers_whole_day():
    span = shift_span("SL", date(2024, 3, 5))

    assert span.start == datetime(2024, 3, 5, 0, 0)
    assert span.end.date() == date(2024, 3, 5)
    assert span.end.time() == time(23, 59, 59, 999000)


def test_times_for_leave_code_is_unknown():
    with pytest.raises(UnknownShiftType):
        times_for(ShiftType.PAID_LEAVE)

    assert ShiftType.PAID_LEAVE not in SHIFT_TIMES


def test_unrecognised_code_is_rejected():
    with pytest.raises(ValidationError):
        hours_worked("X", date(2024, 3, 5))


def test_shift_names():
    assert shift_name(ShiftType.MORNING) == "Morning Shift"
    assert shift_name("NH") == "National Holiday"
    assert shift_name("bogus") == "Unknown Shift"
