from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from ..common.permissions import ensure_admin, ensure_can_modify, ensure_owner_or_admin
from ..common.validators import (
    parse_date,
    parse_leave_type,
    parse_status,
    require_date_range,
    require_non_empty,
)
from ..core.enums import RequestStatus
from ..core.exceptions import Conflict, DomainError, InvariantViolation, NotFound, PermissionDenied, ValidationError
from ..core.transitions import check_transition
from ..shifts.repository import ShiftRepository
from ..users.model import SessionUser
from .model import LeaveDocument, LeaveRequest
from .overlap import OverlapDetector
from .repository import LeaveRequestRepository
from .workflow import ShiftMaterializer

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "You already have a pending or approved leave request for this period"


def _parse_documents(documents: Iterable) -> tuple[LeaveDocument, ...]:
    out: list[LeaveDocument] = []
    for d in documents or ():
        if isinstance(d, LeaveDocument):
            out.append(d)
            continue
        if not isinstance(d, dict):
            raise ValidationError("Invalid document")
        out.append(
            LeaveDocument(
                name=require_non_empty(d.get("name"), "Document name"),
                path=require_non_empty(d.get("path"), "Document path"),
            )
        )
    return tuple(out)


class LeaveRequestService:
    """Use cases: leave request lifecycle.

    A status change is persisted first; materializing or retracting the
    per-day shifts runs afterwards and can be retried by repeating the call.
    """

    def __init__(
        self,
        leaves: LeaveRequestRepository,
        shifts: ShiftRepository,
        *,
        overlap: Optional[OverlapDetector] = None,
        materializer: Optional[ShiftMaterializer] = None,
    ):
        self._leaves = leaves
        self._overlap = overlap or OverlapDetector(leaves)
        self._materializer = materializer or ShiftMaterializer(shifts)

    def _get(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFound("Leave request not found")
        return req

    def _ensure_no_overlap(self, user_id: int, start, end, exclude_id: Optional[int] = None) -> None:
        overlapping = self._overlap.find_overlapping(user_id, start, end, exclude_id=exclude_id)
        if overlapping:
            logger.warning(
                "leave request overlaps",
                extra={"user_id": user_id, "conflicting_ids": [r.request_id for r in overlapping]},
            )
            raise Conflict(CONFLICT_MESSAGE)

    def list_for_user(self, actor: SessionUser, *, user_id: int, status=None) -> list[LeaveRequest]:
        ensure_owner_or_admin(actor, user_id, "Not authorized to access these leave requests")
        status = parse_status(status) if status else None
        return list(self._leaves.list_for_user(user_id=int(user_id), status=status))

    def list_pending(self, actor: SessionUser) -> list[LeaveRequest]:
        ensure_admin(actor, "Not authorized to access all pending leave requests")
        return list(self._leaves.list_by_status(status=RequestStatus.PENDING))

    def create(
        self,
        actor: SessionUser,
        *,
        request_type,
        start_date,
        end_date,
        reason: str,
        documents: Iterable = (),
    ) -> LeaveRequest:
        request_type = parse_leave_type(request_type)
        start = parse_date(start_date, "start date")
        end = parse_date(end_date, "end date")
        require_date_range(start, end)
        reason = require_non_empty(reason, "Reason")
        docs = _parse_documents(documents)

        self._ensure_no_overlap(actor.user_id, start, end)

        request_id = self._leaves.create(
            user_id=int(actor.user_id),
            request_type=request_type,
            start_date=start,
            end_date=end,
            reason=reason,
            documents=docs,
        )
        logger.info("leave request created", extra={"request_id": request_id, "user_id": actor.user_id})
        return self._get(request_id)

    def update(
        self,
        actor: SessionUser,
        *,
        request_id: int,
        request_type=None,
        start_date=None,
        end_date=None,
        reason: Optional[str] = None,
        status=None,
        rejection_reason: Optional[str] = None,
    ) -> LeaveRequest:
        req = self._get(request_id)
        ensure_can_modify(actor, owner_id=req.user_id, status=req.status, what="leave request")

        target = parse_status(status) if status else req.status
        check_transition(current=req.status, target=target, role=actor.role)

        changes: dict = {}
        if any(v is not None for v in (request_type, start_date, end_date, reason)):
            if req.status != RequestStatus.PENDING:
                raise ValidationError("Only pending leave requests can be edited")

            if request_type:
                changes["request_type"] = parse_leave_type(request_type)

            if start_date or end_date:
                start = parse_date(start_date, "start date") if start_date else req.start_date
                end = parse_date(end_date, "end date") if end_date else req.end_date
                require_date_range(start, end)
                self._ensure_no_overlap(req.user_id, start, end, exclude_id=req.request_id)
                changes["start_date"] = start
                changes["end_date"] = end

            if reason is not None:
                changes["reason"] = require_non_empty(reason, "Reason")

        if target == RequestStatus.APPROVED:
            changes["approved_by"] = int(actor.user_id)
        elif target == RequestStatus.REJECTED and req.status != RequestStatus.REJECTED:
            changes["rejection_reason"] = (rejection_reason or "").strip() or None
        changes["status"] = target

        updated = replace(req, **changes)
        if not self._leaves.update(updated):
            raise NotFound("Leave request not found")

        if target != req.status:
            logger.info(
                "leave request status changed",
                extra={"request_id": req.request_id, "from": req.status.value, "to": target.value, "by": actor.user_id},
            )

        if target == RequestStatus.APPROVED:
            self._run_side_effect(self._materializer.materialize, updated, "was approved but its shifts could not be created")
        elif req.status == RequestStatus.APPROVED and target == RequestStatus.REJECTED:
            self._run_side_effect(self._materializer.retract, req, "was rejected but its shifts could not be removed")

        return updated

    def approve(self, actor: SessionUser, *, request_id: int) -> LeaveRequest:
        return self.update(actor, request_id=request_id, status=RequestStatus.APPROVED)

    def reject(self, actor: SessionUser, *, request_id: int, rejection_reason: Optional[str] = None) -> LeaveRequest:
        return self.update(actor, request_id=request_id, status=RequestStatus.REJECTED, rejection_reason=rejection_reason)

    def delete(self, actor: SessionUser, *, request_id: int) -> None:
        req = self._get(request_id)
        ensure_owner_or_admin(actor, req.user_id, "Not authorized to delete this leave request")
        if not actor.is_admin and req.status == RequestStatus.APPROVED:
            raise PermissionDenied("Cannot delete an approved leave request")

        if req.status == RequestStatus.APPROVED:
            self._run_side_effect(self._materializer.retract, req, "could not be deleted because its shifts could not be removed")

        if not self._leaves.delete(req.request_id):
            raise NotFound("Leave request not found")
        logger.info("leave request deleted", extra={"request_id": req.request_id, "by": actor.user_id})

    def _run_side_effect(self, step, leave: LeaveRequest, failure: str) -> int:
        try:
            return step(leave)
        except DomainError:
            raise
        except Exception as e:
            logger.exception("leave side effect failed", extra={"request_id": leave.request_id})
            raise InvariantViolation(f"Leave request {leave.request_id} {failure}; retry the operation") from e
