from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass, replace
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import iter_days, now_local
from ..common.permissions import ensure_admin, ensure_can_modify, ensure_owner_or_admin
from ..common.validators import parse_date, parse_shift_type, parse_status, require_date_range
from ..core.constants import DEFAULT_RANGE_DAYS
from ..core.enums import RequestStatus
from ..core.exceptions import Conflict, NotFound, PermissionDenied
from ..core.transitions import check_transition
from ..users.model import SessionUser
from ..users.repository import UserRepository
from .completeness import DayCompleteness, check_day
from .hours import shift_span
from .model import NewShift, Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarDay:
    work_date: date
    shifts: tuple[Shift, ...]
    completeness: DayCompleteness

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "shifts": [s.to_dict() for s in self.shifts],
            "is_complete": self.completeness.is_complete,
            "missing_shifts": [t.value for t in self.completeness.missing_types],
        }


class ShiftService:
    """Use cases: request, assign, review and list shifts."""

    def __init__(self, shifts: ShiftRepository, users: UserRepository, *, default_range_days: int = DEFAULT_RANGE_DAYS):
        self._shifts = shifts
        self._users = users
        self._default_range_days = int(default_range_days)

    def _resolve_range(self, start, end, today: Optional[date]) -> tuple[date, date]:
        start_d = parse_date(start, "start date") if start else (today or now_local().date())
        end_d = parse_date(end, "end date") if end else start_d + timedelta(days=self._default_range_days)
        require_date_range(start_d, end_d)
        return start_d, end_d

    def _get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFound("Shift not found")
        return shift

    def list_for_user(
        self,
        actor: SessionUser,
        *,
        user_id: int,
        start=None,
        end=None,
        today: Optional[date] = None,
    ) -> list[Shift]:
        ensure_owner_or_admin(actor, user_id, "Not authorized to access these shifts")
        start_d, end_d = self._resolve_range(start, end, today)
        return list(self._shifts.list_for_user(user_id=int(user_id), start=start_d, end=end_d))

    def create(
        self,
        actor: SessionUser,
        *,
        user_id: int,
        work_date,
        shift_type,
        notes: Optional[str] = None,
    ) -> Shift:
        if not actor.is_admin and int(actor.user_id) != int(user_id):
            raise PermissionDenied("Not authorized to create shifts for other users")

        shift_type = parse_shift_type(shift_type)
        work_date = parse_date(work_date, "date")

        if not self._users.get_by_id(int(user_id)):
            raise NotFound("User not found")

        if self._shifts.find_one(user_id=int(user_id), work_date=work_date, shift_type=shift_type):
            raise Conflict("A shift of this type already exists for this date")

        span = shift_span(shift_type, work_date)
        new = NewShift(
            user_id=int(user_id),
            work_date=work_date,
            shift_type=shift_type,
            start_time=span.start,
            end_time=span.end,
            status=RequestStatus.APPROVED if actor.is_admin else RequestStatus.PENDING,
            notes=(notes or "").strip() or None,
            is_user_suggested=not actor.is_admin,
            created_by=int(actor.user_id),
        )
        shift_id = self._shifts.create(new)
        logger.info(
            "shift created",
            extra={"shift_id": shift_id, "user_id": new.user_id, "shift_type": shift_type.value, "status": new.status.value},
        )
        return Shift(shift_id=int(shift_id), **asdict(new))

    def update(
        self,
        actor: SessionUser,
        *,
        shift_id: int,
        shift_type=None,
        work_date=None,
        notes: Optional[str] = None,
        status=None,
    ) -> Shift:
        shift = self._get(shift_id)
        ensure_can_modify(actor, owner_id=shift.user_id, status=shift.status, what="shift")

        target = parse_status(status) if status else shift.status
        check_transition(current=shift.status, target=target, role=actor.role)

        new_type = parse_shift_type(shift_type) if shift_type else shift.shift_type
        new_date = parse_date(work_date, "date") if work_date else shift.work_date

        if (new_type, new_date) != (shift.shift_type, shift.work_date):
            existing = self._shifts.find_one(user_id=shift.user_id, work_date=new_date, shift_type=new_type)
            if existing and existing.shift_id != shift.shift_id:
                raise Conflict("A shift of this type already exists for this date")

        span = shift_span(new_type, new_date)
        updated = replace(
            shift,
            shift_type=new_type,
            work_date=new_date,
            start_time=span.start,
            end_time=span.end,
            notes=notes.strip() if notes is not None else shift.notes,
            status=target,
            updated_by=int(actor.user_id),
        )
        if not self._shifts.update(updated):
            raise NotFound("Shift not found")

        if target != shift.status:
            logger.info(
                "shift status changed",
                extra={"shift_id": shift.shift_id, "from": shift.status.value, "to": target.value, "by": actor.user_id},
            )
        return updated

    def delete(self, actor: SessionUser, *, shift_id: int) -> None:
        shift = self._get(shift_id)
        ensure_owner_or_admin(actor, shift.user_id, "Not authorized to delete this shift")
        if not actor.is_admin and shift.status == RequestStatus.APPROVED:
            raise PermissionDenied("Cannot delete an approved shift")

        if not self._shifts.delete(shift.shift_id):
            raise NotFound("Shift not found")
        logger.info("shift deleted", extra={"shift_id": shift.shift_id, "by": actor.user_id})

    def calendar(self, actor: SessionUser, *, start=None, end=None, today: Optional[date] = None) -> list[CalendarDay]:
        ensure_admin(actor, "Not authorized to access the full calendar")
        start_d, end_d = self._resolve_range(start, end, today)

        by_date: dict[date, list[Shift]] = defaultdict(list)
        for s in self._shifts.list_range(start=start_d, end=end_d):
            by_date[s.work_date].append(s)

        days: list[CalendarDay] = []
        for d in iter_days(start_d, end_d):
            shifts = tuple(by_date.get(d, ()))
            staffed = [s for s in shifts if s.status != RequestStatus.REJECTED]
            days.append(CalendarDay(work_date=d, shifts=shifts, completeness=check_day(staffed)))
        return days
