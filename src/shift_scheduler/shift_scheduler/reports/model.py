from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import ShiftType
from ..shifts.model import Shift
from ..shifts.timetable import shift_name
from ..users.model import User


def _empty_counts() -> dict[ShiftType, int]:
    return {t: 0 for t in ShiftType}


@dataclass(frozen=True)
class ReportUser:
    user_id: int
    name: str
    email: str
    department: Optional[str] = None
    position: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "ReportUser":
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            department=user.department,
            position=user.position,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
        }


@dataclass
class ReportSummary:
    """Running totals: working shifts add hours and days, leave shifts add leaves."""

    total_hours: float = 0.0
    total_days: int = 0
    total_leaves: int = 0
    shift_counts: dict[ShiftType, int] = field(default_factory=_empty_counts)

    def add(self, shift: Shift) -> None:
        self.shift_counts[shift.shift_type] += 1
        if shift.shift_type.is_leave:
            self.total_leaves += 1
        else:
            self.total_hours += shift.hours
            self.total_days += 1

    def to_dict(self) -> dict:
        return {
            "total_hours": round(self.total_hours, 2),
            "total_days": self.total_days,
            "total_leaves": self.total_leaves,
            "shift_counts": {t.value: n for t, n in self.shift_counts.items()},
        }


@dataclass
class DayBucket:
    work_date: date
    shifts: list[Shift] = field(default_factory=list)
    total_hours: float = 0.0

    def add(self, shift: Shift) -> None:
        self.shifts.append(shift)
        self.total_hours += shift.hours

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "total_hours": round(self.total_hours, 2),
            "shifts": [
                {
                    "id": s.shift_id,
                    "shift_type": s.shift_type.value,
                    "name": shift_name(s.shift_type),
                    "start_time": s.start_time.isoformat(),
                    "end_time": s.end_time.isoformat(),
                    "hours": round(s.hours, 2),
                }
                for s in self.shifts
            ],
        }


@dataclass
class WeekBucket:
    year: int
    week: int
    start: date
    end: date
    summary: ReportSummary = field(default_factory=ReportSummary)

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.week

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "week": self.week,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            **self.summary.to_dict(),
        }


@dataclass
class Report:
    user: ReportUser
    start: date
    end: date
    summary: ReportSummary
    days: list[DayBucket]
    weeks: list[WeekBucket] = field(default_factory=list)
    period: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        out = {
            "user": self.user.to_dict(),
            "period": {"start": self.start.isoformat(), "end": self.end.isoformat(), **self.period},
            "summary": self.summary.to_dict(),
            "daily": [d.to_dict() for d in self.days],
        }
        if self.weeks:
            out["weekly"] = [w.to_dict() for w in self.weeks]
        return out
