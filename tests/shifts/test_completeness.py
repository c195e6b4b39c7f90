from __future__ import annotations

from datetime import date

from src.shift_scheduler.shift_scheduler.core.enums import RequestStatus, ShiftType
from src.shift_scheduler.shift_scheduler.shifts.completeness import check_day
from src.shift_scheduler.shift_scheduler.shifts.hours import shift_span
from src.shift_scheduler.shift_scheduler.shifts.model import Shift


def _shift(shift_id: int, shift_type: ShiftType) -> Shift:
    span = shift_span(shift_type, date(2024, 3, 5))
    return Shift(
        shift_id=shift_id,
        user_id=shift_id,
        work_date=date(2024, 3, 5),
        shift_type=shift_type,
        start_time=span.start,
        end_time=span.end,
        status=RequestStatus.APPROVED,
        created_by=1,
    )


def test_all_three_rotations_make_a_complete_day():
    result = check_day([_shift(1, ShiftType.MORNING), _shift(2, ShiftType.AFTERNOON), _shift(3, ShiftType.NIGHT)])

    assert result.is_complete
    assert result.missing_types == ()


def test_missing_types_are_reported_in_rotation_order():
    result = check_day([_shift(1, ShiftType.AFTERNOON), _shift(2, ShiftType.DAY), _shift(3, ShiftType.SICK_LEAVE)])

    assert not result.is_complete
    assert result.missing_types == (ShiftType.MORNING, ShiftType.NIGHT)


def test_empty_day_is_missing_everything():
    result = check_day([])

    assert not result.is_complete
    assert set(result.missing_types) == {ShiftType.MORNING, ShiftType.AFTERNOON, ShiftType.NIGHT}


def test_missing_night_only():
    result = check_day([_shift(1, ShiftType.MORNING), _shift(2, ShiftType.AFTERNOON)])

    assert not result.is_complete
    assert result.missing_types == (ShiftType.NIGHT,)


def test_extra_day_shift_does_not_matter():
    result = check_day(
        [_shift(1, ShiftType.MORNING), _shift(2, ShiftType.AFTERNOON), _shift(3, ShiftType.NIGHT), _shift(4, ShiftType.DAY)]
    )

    assert result.is_complete
