"""Side effects of leave approval: per-day shift records.

Both steps are idempotent. Materializing skips days that already have a shift
of the leave type, and retracting only removes shifts carrying the
auto-generated note, so re-running either after a partial failure is safe.
"""

from __future__ import annotations

import logging

from ..common.datetime_utils import iter_days
from ..core.constants import AUTO_GENERATED_NOTE
from ..core.enums import RequestStatus, ShiftType
from ..shifts.hours import shift_span
from ..shifts.model import NewShift
from ..shifts.repository import ShiftRepository
from .model import LeaveRequest

logger = logging.getLogger(__name__)


def auto_generated_note(shift_type: ShiftType) -> str:
    return AUTO_GENERATED_NOTE.format(code=shift_type.value)


class ShiftMaterializer:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def materialize(self, leave: LeaveRequest) -> int:
        """Create one approved full-day shift per leave day that lacks one. Returns the number created."""

        shift_type = leave.request_type.shift_type
        note = auto_generated_note(shift_type)
        created_by = leave.approved_by or leave.user_id

        to_create: list[NewShift] = []
        for day in iter_days(leave.start_date, leave.end_date):
            if self._shifts.find_one(user_id=leave.user_id, work_date=day, shift_type=shift_type):
                continue
            span = shift_span(shift_type, day)
            to_create.append(
                NewShift(
                    user_id=leave.user_id,
                    work_date=day,
                    shift_type=shift_type,
                    start_time=span.start,
                    end_time=span.end,
                    status=RequestStatus.APPROVED,
                    notes=note,
                    is_user_suggested=False,
                    created_by=int(created_by),
                )
            )

        created = self._shifts.create_many(to_create) if to_create else 0
        logger.info(
            "leave materialized",
            extra={"request_id": leave.request_id, "created_count": created, "skipped_count": leave.total_days - len(to_create)},
        )
        return created

    def retract(self, leave: LeaveRequest) -> int:
        """Delete the auto-generated shifts of a leave period. Returns the number deleted."""

        shift_type = leave.request_type.shift_type
        deleted = self._shifts.delete_with_note(
            user_id=leave.user_id,
            shift_type=shift_type,
            start=leave.start_date,
            end=leave.end_date,
            note=auto_generated_note(shift_type),
        )
        logger.info("leave retracted", extra={"request_id": leave.request_id, "deleted_count": deleted})
        return deleted
