from __future__ import annotations

from datetime import date

import pytest

from src.shift_scheduler.shift_scheduler.core.exceptions import NotFound, PermissionDenied, ValidationError


@pytest.fixture
def service(container):
    return container.report_service


@pytest.fixture
def schedule(container, admin, employee, other_employee):
    shifts = container.shift_service
    shifts.create(admin, user_id=employee.user_id, work_date="2024-06-03", shift_type="M")
    shifts.create(admin, user_id=employee.user_id, work_date="2024-06-04", shift_type="D")
    shifts.create(admin, user_id=other_employee.user_id, work_date="2024-06-04", shift_type="N")
    # Pending requests never count in reports.
    shifts.create(employee, user_id=employee.user_id, work_date="2024-06-05", shift_type="A")

    leave = container.leave_service.create(
        employee, request_type="SL", start_date="2024-06-06", end_date="2024-06-07", reason="Flu"
    )
    container.leave_service.approve(admin, request_id=leave.request_id)


def test_weekly_report_counts_only_approved_shifts(service, employee, schedule):
    report = service.weekly(employee, user_id=employee.user_id, week=23, year=2024)

    assert (report.start, report.end) == (date(2024, 6, 3), date(2024, 6, 9))
    assert report.summary.total_days == 2
    assert report.summary.total_hours == pytest.approx(17.2)
    assert report.summary.total_leaves == 2
    assert report.period == {"year": 2024, "week": 23}


def test_weekly_report_defaults_to_current_week(service, employee, schedule, today):
    report = service.weekly(employee, user_id=employee.user_id, today=today)

    assert report.period == {"year": 2024, "week": 23}


def test_monthly_report_has_week_breakdown(service, admin, employee, schedule, today):
    report = service.monthly(admin, user_id=employee.user_id, today=today)

    assert report.period == {"year": 2024, "month": 6}
    assert len(report.days) == 30
    assert report.weeks[0].key == (2024, 22)
    week_23 = next(w for w in report.weeks if w.week == 23)
    assert week_23.summary.total_days == 2
    assert week_23.summary.total_leaves == 2


def test_report_of_another_user_requires_admin(service, employee, other_employee):
    with pytest.raises(PermissionDenied):
        service.weekly(employee, user_id=other_employee.user_id, week=23, year=2024)


def test_report_for_unknown_user(service, admin):
    with pytest.raises(NotFound):
        service.monthly(admin, user_id=99, month=6, year=2024)


def test_bad_month_is_rejected(service, admin, employee):
    with pytest.raises(ValidationError):
        service.monthly(admin, user_id=employee.user_id, month=13, year=2024)


def test_all_reports_one_per_user(service, admin, schedule):
    reports = service.all_reports(admin, report_type="weekly", week=23, year=2024)

    by_user = {r.user.user_id: r for r in reports}
    assert set(by_user) == {1, 2, 3}
    assert by_user[2].summary.total_days == 2
    assert by_user[3].summary.total_hours == pytest.approx(8.2)
    assert by_user[1].summary.total_days == 0


def test_all_reports_validates_type_and_role(service, admin, employee):
    with pytest.raises(ValidationError):
        service.all_reports(admin, report_type="yearly")
    with pytest.raises(PermissionDenied):
        service.all_reports(employee)
