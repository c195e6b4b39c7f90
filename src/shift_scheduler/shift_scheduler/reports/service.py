from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.permissions import ensure_admin, ensure_owner_or_admin
from ..common.validators import parse_int
from ..core.enums import RequestStatus
from ..core.exceptions import NotFound, ValidationError
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from ..users.model import SessionUser, User
from ..users.repository import UserRepository
from .aggregator import build_monthly_report, build_report, month_bounds, week_bounds, week_number, week_year
from .model import Report, ReportUser

logger = logging.getLogger(__name__)

REPORT_TYPES = ("weekly", "monthly")


class ReportService:
    """Use cases: weekly and monthly hour/leave reports over approved shifts."""

    def __init__(self, shifts: ShiftRepository, users: UserRepository):
        self._shifts = shifts
        self._users = users

    def _user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _week_period(week, year, today: Optional[date]) -> tuple[int, int]:
        today = today or now_local().date()
        week = parse_int(week, "week", min_value=1, max_value=53) if week else week_number(today)
        year = parse_int(year, "year") if year else week_year(today)
        return week, year

    @staticmethod
    def _month_period(month, year, today: Optional[date]) -> tuple[int, int]:
        today = today or now_local().date()
        month = parse_int(month, "month", min_value=1, max_value=12) if month else today.month
        year = parse_int(year, "year") if year else today.year
        return month, year

    def weekly(self, actor: SessionUser, *, user_id: int, week=None, year=None, today: Optional[date] = None) -> Report:
        ensure_owner_or_admin(actor, user_id, "Not authorized to access this report")
        user = self._user(user_id)
        week, year = self._week_period(week, year, today)
        start, end = week_bounds(week, year)

        shifts = self._shifts.list_for_user(user_id=user.user_id, start=start, end=end, status=RequestStatus.APPROVED)
        return build_report(shifts, start, end, ReportUser.from_user(user), period={"year": year, "week": week})

    def monthly(self, actor: SessionUser, *, user_id: int, month=None, year=None, today: Optional[date] = None) -> Report:
        ensure_owner_or_admin(actor, user_id, "Not authorized to access this report")
        user = self._user(user_id)
        month, year = self._month_period(month, year, today)
        start, end = month_bounds(month, year)

        shifts = self._shifts.list_for_user(user_id=user.user_id, start=start, end=end, status=RequestStatus.APPROVED)
        return build_monthly_report(shifts, year, month, ReportUser.from_user(user))

    def all_reports(
        self,
        actor: SessionUser,
        *,
        report_type: str = "monthly",
        year=None,
        month=None,
        week=None,
        today: Optional[date] = None,
    ) -> list[Report]:
        ensure_admin(actor, "Not authorized to access all reports")
        report_type = (report_type or "monthly").strip().lower()
        if report_type not in REPORT_TYPES:
            raise ValidationError(f"Invalid report type: {report_type!r}")

        if report_type == "weekly":
            week, year = self._week_period(week, year, today)
            start, end = week_bounds(week, year)
        else:
            month, year = self._month_period(month, year, today)
            start, end = month_bounds(month, year)

        by_user: dict[int, list[Shift]] = defaultdict(list)
        for s in self._shifts.list_range(start=start, end=end, status=RequestStatus.APPROVED):
            by_user[s.user_id].append(s)

        reports: list[Report] = []
        for user in self._users.list_all():
            shifts = by_user.get(user.user_id, [])
            if report_type == "weekly":
                report = build_report(shifts, start, end, ReportUser.from_user(user), period={"year": year, "week": week})
            else:
                report = build_monthly_report(shifts, year, month, ReportUser.from_user(user))
            reports.append(report)

        logger.info("reports generated", extra={"report_type": report_type, "count": len(reports)})
        return reports
