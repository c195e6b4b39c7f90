from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Lifecycle status shared by shifts and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ShiftType(str, Enum):
    """Shift-type codes as stored on shift records."""

    MORNING = "M"
    AFTERNOON = "A"
    NIGHT = "N"
    DAY = "D"
    PAID_LEAVE = "PL"
    SICK_LEAVE = "SL"
    COMPENSATION = "C"
    NATIONAL_HOLIDAY = "NH"

    @property
    def is_leave(self) -> bool:
        return self.value in LEAVE_CODES


class LeaveType(str, Enum):
    """Request-type codes accepted on leave requests."""

    PAID_LEAVE = "PL"
    SICK_LEAVE = "SL"
    COMPENSATION = "C"
    NATIONAL_HOLIDAY = "NH"

    @property
    def shift_type(self) -> ShiftType:
        return ShiftType(self.value)


LEAVE_CODES = frozenset(t.value for t in LeaveType)
REQUIRED_DAILY_SHIFTS = (ShiftType.MORNING, ShiftType.AFTERNOON, ShiftType.NIGHT)
