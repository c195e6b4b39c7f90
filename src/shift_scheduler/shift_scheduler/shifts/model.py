from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, ShiftType
from .hours import hours_worked
from .timetable import shift_name


@dataclass(frozen=True)
class Shift:
    """Domain entity: one calendar assignment (work or leave) for one user."""

    shift_id: int
    user_id: int
    work_date: date
    shift_type: ShiftType
    start_time: datetime
    end_time: datetime
    status: RequestStatus
    created_by: int
    notes: Optional[str] = None
    is_user_suggested: bool = False
    updated_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def hours(self) -> float:
        return hours_worked(self.shift_type, self.work_date)

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "shift_type": self.shift_type.value,
            "name": shift_name(self.shift_type),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status.value,
            "notes": self.notes or "",
            "is_user_suggested": self.is_user_suggested,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class NewShift:
    """Insert payload for a shift that has no id yet."""

    user_id: int
    work_date: date
    shift_type: ShiftType
    start_time: datetime
    end_time: datetime
    status: RequestStatus
    created_by: int
    notes: Optional[str] = None
    is_user_suggested: bool = False
