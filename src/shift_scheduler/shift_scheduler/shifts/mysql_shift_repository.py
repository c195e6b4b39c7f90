from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RequestStatus, ShiftType
from ..core.exceptions import Conflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import NewShift, Shift
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, user_id, work_date, shift_type, start_time, end_time, status,
    notes, is_user_suggested, created_by, updated_by, created_at, updated_at
"""

_INSERT = """
    INSERT INTO shifts(
        user_id, work_date, shift_type, start_time, end_time, status,
        notes, is_user_suggested, created_by
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        user_id=int(r["user_id"]),
        work_date=as_date(r["work_date"]),
        shift_type=ShiftType(r["shift_type"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        status=RequestStatus(r["status"]),
        notes=r.get("notes"),
        is_user_suggested=bool(r.get("is_user_suggested")),
        created_by=int(r["created_by"]),
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _insert_params(s: NewShift) -> tuple:
    return (
        int(s.user_id),
        s.work_date,
        s.shift_type.value,
        s.start_time,
        s.end_time,
        s.status.value,
        s.notes,
        1 if s.is_user_suggested else 0,
        int(s.created_by),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def find_one(self, *, user_id: int, work_date: date, shift_type: ShiftType) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE user_id=%s AND work_date=%s AND shift_type=%s
                LIMIT 1
                """,
                (int(user_id), work_date, shift_type.value),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def list_for_user(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[Shift]:
        return self._list(start=start, end=end, status=status, user_id=int(user_id))

    def list_range(self, *, start: date, end: date, status: Optional[RequestStatus] = None) -> Sequence[Shift]:
        return self._list(start=start, end=end, status=status)

    def _list(
        self,
        *,
        start: date,
        end: date,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[Shift]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {where}
                ORDER BY work_date ASC, start_time ASC, shift_id ASC
                """,
                tuple(params),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def create(self, shift: NewShift) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _insert_params(shift))
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise Conflict("A shift of this type already exists for this date")
            raise

    def create_many(self, shifts: Sequence[NewShift]) -> int:
        if not shifts:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT, [_insert_params(s) for s in shifts])
            return len(shifts)

    def update(self, shift: Shift) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE shifts
                    SET work_date=%s, shift_type=%s, start_time=%s, end_time=%s,
                        status=%s, notes=%s, updated_by=%s
                    WHERE shift_id=%s
                    """,
                    (
                        shift.work_date,
                        shift.shift_type.value,
                        shift.start_time,
                        shift.end_time,
                        shift.status.value,
                        shift.notes,
                        shift.updated_by,
                        int(shift.shift_id),
                    ),
                )
                # rowcount is 0 when nothing changed, so look the row up instead.
                cur.execute("SELECT 1 AS ok FROM shifts WHERE shift_id=%s", (int(shift.shift_id),))
                return fetchone(cur) is not None
        except Exception as e:
            if is_duplicate_key(e):
                raise Conflict("A shift of this type already exists for this date")
            raise

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0

    def delete_with_note(
        self,
        *,
        user_id: int,
        shift_type: ShiftType,
        start: date,
        end: date,
        note: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM shifts
                WHERE user_id=%s AND shift_type=%s
                  AND work_date BETWEEN %s AND %s
                  AND notes LIKE %s
                """,
                (int(user_id), shift_type.value, start, end, f"%{note}%"),
            )
            return int(cur.rowcount)
