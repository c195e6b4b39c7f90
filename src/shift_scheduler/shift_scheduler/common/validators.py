from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus, ShiftType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_shift_type(value) -> ShiftType:
    try:
        return ShiftType(value)
    except ValueError:
        raise ValidationError(f"Invalid shift type: {value!r}")


def parse_leave_type(value) -> LeaveType:
    try:
        return LeaveType(value)
    except ValueError:
        raise ValidationError(f"Invalid request type: {value!r}")


def parse_status(value) -> RequestStatus:
    try:
        return RequestStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


def parse_date(value, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)")


def parse_int(value, field_name: str, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    if (min_value is not None and number < min_value) or (max_value is not None and number > max_value):
        raise ValidationError(f"{field_name.capitalize()} must be between {min_value} and {max_value}")
    return number


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must not be before start date")
