from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus, ShiftType
from .model import NewShift, Shift


class ShiftRepository(Protocol):
    """Repository interface for Shift.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def find_one(self, *, user_id: int, work_date: date, shift_type: ShiftType) -> Optional[Shift]:
        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[Shift]:
        """Shifts of one user with start <= work_date <= end, ordered by date."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, status: Optional[RequestStatus] = None) -> Sequence[Shift]:
        """Shifts of every user in the range, ordered by date."""

        raise NotImplementedError

    def create(self, shift: NewShift) -> int:
        """Insert one shift. Returns shift_id."""

        raise NotImplementedError

    def create_many(self, shifts: Sequence[NewShift]) -> int:
        """Insert shifts in one transaction. Returns the number inserted."""

        raise NotImplementedError

    def update(self, shift: Shift) -> bool:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError

    def delete_with_note(
        self,
        *,
        user_id: int,
        shift_type: ShiftType,
        start: date,
        end: date,
        note: str,
    ) -> int:
        """Delete shifts of one user/type in the range whose notes contain ``note``.

        Returns the number deleted.
        """

        raise NotImplementedError
