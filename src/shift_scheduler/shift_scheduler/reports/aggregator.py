"""Fold approved shifts into daily, weekly and monthly report buckets.

Week numbers follow ISO 8601: a week runs Monday to Sunday and belongs to the
year containing its Thursday.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from ..common.validators import parse_int
from ..shifts.model import Shift
from .model import DayBucket, Report, ReportSummary, ReportUser, WeekBucket

logger = logging.getLogger(__name__)


def _thursday_of(d: date) -> date:
    return d + timedelta(days=3 - d.weekday())


def week_number(d: date) -> int:
    thursday = _thursday_of(d)
    days_since_jan1 = (thursday - date(thursday.year, 1, 1)).days
    return days_since_jan1 // 7 + 1


def week_year(d: date) -> int:
    """Year the week of ``d`` is numbered in; differs from ``d.year`` around New Year."""
    return _thursday_of(d).year


def weeks_in_year(year: int) -> int:
    # 28 December always falls in the last week of its year.
    return week_number(date(year, 12, 28))


def week_bounds(week: int, year: int) -> tuple[date, date]:
    """Monday and Sunday of ISO week ``week`` of ``year``."""

    year = parse_int(year, "year", min_value=1, max_value=9998)
    week = parse_int(week, "week", min_value=1, max_value=weeks_in_year(year))

    jan1 = date(year, 1, 1)
    first_monday = jan1 - timedelta(days=jan1.weekday())
    # Jan 1 on Friday..Sunday belongs to the last week of the previous year.
    if jan1.weekday() > 3:
        first_monday += timedelta(days=7)

    start = first_monday + timedelta(weeks=week - 1)
    return start, start + timedelta(days=6)


def month_bounds(month: int, year: int) -> tuple[date, date]:
    month = parse_int(month, "month", min_value=1, max_value=12)
    year = parse_int(year, "year", min_value=1, max_value=9999)
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def build_report(
    shifts: Iterable[Shift],
    start: date,
    end: date,
    user: ReportUser,
    *,
    period: Optional[dict] = None,
) -> Report:
    day_count = (end - start).days + 1
    days = [DayBucket(work_date=start + timedelta(days=i)) for i in range(max(day_count, 0))]
    summary = ReportSummary()

    for shift in shifts:
        summary.add(shift)
        index = (shift.work_date - start).days
        if 0 <= index < day_count:
            days[index].add(shift)
        else:
            logger.debug(
                "shift outside report window",
                extra={"shift_id": shift.shift_id, "date": shift.work_date.isoformat()},
            )

    return Report(user=user, start=start, end=end, summary=summary, days=days, period=dict(period or {}))


def build_monthly_report(shifts: Iterable[Shift], year: int, month: int, user: ReportUser) -> Report:
    start, end = month_bounds(month, year)
    report = build_report(shifts, start, end, user, period={"year": int(year), "month": int(month)})

    weeks: dict[tuple[int, int], WeekBucket] = {}
    for day in report.days:
        key = (week_year(day.work_date), week_number(day.work_date))
        bucket = weeks.get(key)
        if bucket is None:
            week_start, week_end = week_bounds(key[1], key[0])
            bucket = WeekBucket(year=key[0], week=key[1], start=week_start, end=week_end)
            weeks[key] = bucket
        for shift in day.shifts:
            bucket.summary.add(shift)

    report.weeks = sorted(weeks.values(), key=lambda w: w.key)
    return report
