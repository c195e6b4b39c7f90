from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import days_between
from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveDocument:
    name: str
    path: str
    uploaded_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a request for a contiguous, inclusive leave period."""

    request_id: int
    user_id: int
    request_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    approved_by: Optional[int] = None
    rejection_reason: Optional[str] = None
    documents: tuple[LeaveDocument, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def total_days(self) -> int:
        return days_between(self.start_date, self.end_date) + 1

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "user_id": self.user_id,
            "request_type": self.request_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_days": self.total_days,
            "reason": self.reason,
            "status": self.status.value,
            "approved_by": self.approved_by,
            "rejection_reason": self.rejection_reason or "",
            "documents": [
                {
                    "name": d.name,
                    "path": d.path,
                    "uploaded_at": d.uploaded_at.isoformat() if d.uploaded_at else None,
                }
                for d in self.documents
            ],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
