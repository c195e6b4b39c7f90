from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveDocument, LeaveRequest


class LeaveRequestRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        request_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        documents: Sequence[LeaveDocument] = (),
    ) -> int:
        """Insert a pending request. Returns request_id."""

        raise NotImplementedError

    def update(self, request: LeaveRequest) -> bool:
        """Overwrite the editable fields and status of an existing request."""

        raise NotImplementedError

    def delete(self, request_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        """Requests of one user, newest first."""

        raise NotImplementedError

    def list_by_status(self, *, status: RequestStatus) -> Sequence[LeaveRequest]:
        """Requests of every user with the given status, oldest first."""

        raise NotImplementedError
