from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import RequestStatus
from .model import LeaveRequest
from .repository import LeaveRequestRepository


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive bounds: intervals sharing a single day overlap."""
    return a_start <= b_end and b_start <= a_end


class OverlapDetector:
    """Finds a user's live (non-rejected) leave requests that intersect a date range."""

    def __init__(self, leaves: LeaveRequestRepository):
        self._leaves = leaves

    def find_overlapping(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
        exclude_id: Optional[int] = None,
    ) -> list[LeaveRequest]:
        return [
            r
            for r in self._leaves.list_for_user(user_id=int(user_id))
            if r.status != RequestStatus.REJECTED
            and (exclude_id is None or r.request_id != int(exclude_id))
            and intervals_overlap(r.start_date, r.end_date, start_date, end_date)
        ]
