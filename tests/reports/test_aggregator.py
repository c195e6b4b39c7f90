from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.shift_scheduler.shift_scheduler.core.enums import RequestStatus, ShiftType
from src.shift_scheduler.shift_scheduler.core.exceptions import ValidationError
from src.shift_scheduler.shift_scheduler.reports.aggregator import (
    build_monthly_report,
    build_report,
    week_bounds,
    week_number,
    week_year,
)
from src.shift_scheduler.shift_scheduler.reports.model import ReportUser
from src.shift_scheduler.shift_scheduler.shifts.hours import shift_span
from src.shift_scheduler.shift_scheduler.shifts.model import Shift

USER = ReportUser(user_id=2, name="Eve Employee", email="eve@example.com", department="Operations")


def _shift(shift_id: int, work_date: date, shift_type: ShiftType) -> Shift:
    span = shift_span(shift_type, work_date)
    return Shift(
        shift_id=shift_id,
        user_id=USER.user_id,
        work_date=work_date,
        shift_type=shift_type,
        start_time=span.start,
        end_time=span.end,
        status=RequestStatus.APPROVED,
        created_by=1,
    )


@pytest.mark.parametrize(
    "d, expected_week, expected_year",
    [
        (date(2024, 1, 1), 1, 2024),
        (date(2024, 3, 4), 10, 2024),
        (date(2024, 12, 30), 1, 2025),
        (date(2021, 1, 1), 53, 2020),
        (date(2023, 1, 1), 52, 2022),
        (date(2026, 12, 31), 53, 2026),
    ],
)
def test_week_number_matches_iso_calendar(d, expected_week, expected_year):
    assert week_number(d) == expected_week
    assert week_year(d) == expected_year
    assert (expected_year, expected_week) == d.isocalendar()[:2]


def test_week_bounds_round_trip_over_several_years():
    d = date(2019, 12, 20)
    while d <= date(2027, 1, 10):
        start, end = week_bounds(week_number(d), week_year(d))
        assert start <= d <= end
        assert start.weekday() == 0
        assert end - start == timedelta(days=6)
        d += timedelta(days=3)


def test_week_bounds_first_week_of_2024():
    assert week_bounds(1, 2024) == (date(2024, 1, 1), date(2024, 1, 7))


@pytest.mark.parametrize("week", [0, 53, 54, "x"])
def test_week_bounds_rejects_bad_week(week):
    with pytest.raises(ValidationError):
        week_bounds(week, 2024)


@pytest.mark.parametrize(
    "year, start",
    [
        (2020, date(2020, 12, 28)),
        (2026, date(2026, 12, 28)),
    ],
)
def test_week_53_exists_only_in_long_years(year, start):
    assert week_bounds(53, year) == (start, start + timedelta(days=6))


def test_weekly_report_with_one_morning_and_one_sick_day():
    start, end = week_bounds(10, 2024)
    shifts = [
        _shift(1, date(2024, 3, 5), ShiftType.MORNING),
        _shift(2, date(2024, 3, 7), ShiftType.SICK_LEAVE),
    ]

    report = build_report(shifts, start, end, USER)

    assert report.summary.total_days == 1
    assert report.summary.total_leaves == 1
    assert report.summary.total_hours == pytest.approx(8.2)
    assert report.summary.shift_counts[ShiftType.MORNING] == 1
    assert report.summary.shift_counts[ShiftType.SICK_LEAVE] == 1
    assert report.summary.shift_counts[ShiftType.NIGHT] == 0

    assert len(report.days) == 7
    assert [s.shift_id for s in report.days[1].shifts] == [1]
    assert [s.shift_id for s in report.days[3].shifts] == [2]
    assert report.days[1].total_hours == pytest.approx(8.2)
    assert report.days[3].total_hours == 0.0
    assert all(not report.days[i].shifts for i in (0, 2, 4, 5, 6))


def test_shift_outside_window_counts_in_summary_only():
    start, end = date(2024, 3, 4), date(2024, 3, 10)

    report = build_report([_shift(1, date(2024, 3, 11), ShiftType.DAY)], start, end, USER)

    assert report.summary.total_hours == pytest.approx(9.0)
    assert all(not d.shifts for d in report.days)


def test_monthly_report_groups_days_into_sorted_weeks():
    shifts = [
        _shift(1, date(2024, 3, 1), ShiftType.NIGHT),
        _shift(2, date(2024, 3, 4), ShiftType.DAY),
        _shift(3, date(2024, 3, 5), ShiftType.PAID_LEAVE),
        _shift(4, date(2024, 3, 31), ShiftType.AFTERNOON),
    ]

    report = build_monthly_report(shifts, 2024, 3, USER)

    assert len(report.days) == 31
    assert [w.key for w in report.weeks] == [(2024, 9), (2024, 10), (2024, 11), (2024, 12), (2024, 13)]
    first = report.weeks[0]
    assert (first.start, first.end) == (date(2024, 2, 26), date(2024, 3, 3))
    assert first.summary.total_hours == pytest.approx(8.2)
    second = report.weeks[1].summary
    assert (second.total_days, second.total_leaves) == (1, 1)
    assert second.total_hours == pytest.approx(9.0)
    assert report.weeks[-1].summary.shift_counts[ShiftType.AFTERNOON] == 1


def test_monthly_report_across_iso_year_boundary():
    report = build_monthly_report([], 2021, 1, USER)

    assert [w.key for w in report.weeks] == [(2020, 53), (2021, 1), (2021, 2), (2021, 3), (2021, 4)]


def test_report_serializes_with_iso_dates():
    start, end = week_bounds(10, 2024)
    report = build_report([_shift(1, date(2024, 3, 5), ShiftType.MORNING)], start, end, USER, period={"year": 2024, "week": 10})

    data = report.to_dict()

    assert data["user"]["name"] == "Eve Employee"
    assert data["period"] == {"start": "2024-03-04", "end": "2024-03-10", "year": 2024, "week": 10}
    assert data["summary"]["total_hours"] == 8.2
    assert data["summary"]["shift_counts"]["M"] == 1
    assert set(data["summary"]["shift_counts"]) == {"M", "A", "N", "D", "PL", "SL", "C", "NH"}
    assert data["daily"][1]["shifts"][0]["name"] == "Morning Shift"
    assert "weekly" not in data
