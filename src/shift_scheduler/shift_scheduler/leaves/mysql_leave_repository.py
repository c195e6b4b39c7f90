from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import LeaveDocument, LeaveRequest
from .repository import LeaveRequestRepository

_COLUMNS = """
    request_id, user_id, request_type, start_date, end_date, reason, status,
    approved_by, rejection_reason, created_at, updated_at
"""


def _row_to_request(r: dict, documents: Sequence[LeaveDocument] = ()) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        request_type=LeaveType(r["request_type"]),
        start_date=as_date(r["start_date"]),
        end_date=as_date(r["end_date"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        rejection_reason=r.get("rejection_reason"),
        documents=tuple(documents),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_documents(self, cur, request_ids: Sequence[int]) -> dict[int, list[LeaveDocument]]:
        docs: dict[int, list[LeaveDocument]] = defaultdict(list)
        if not request_ids:
            return docs
        placeholders = ",".join(["%s"] * len(request_ids))
        cur.execute(
            f"""
            SELECT request_id, name, path, uploaded_at
            FROM leave_documents
            WHERE request_id IN ({placeholders})
            ORDER BY document_id ASC
            """,
            tuple(int(i) for i in request_ids),
        )
        for r in fetchall(cur):
            docs[int(r["request_id"])].append(
                LeaveDocument(name=r["name"], path=r["path"], uploaded_at=r.get("uploaded_at"))
            )
        return docs

    def _select(self, where: str, params: tuple, order: str) -> list[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE {where} ORDER BY {order}", params)
            rows = fetchall(cur)
            docs = self._load_documents(cur, [int(r["request_id"]) for r in rows])
            return [_row_to_request(r, docs.get(int(r["request_id"]), ())) for r in rows]

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        rows = self._select("request_id=%s", (int(request_id),), "request_id ASC")
        return rows[0] if rows else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, request_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    request_type.value,
                    start_date,
                    end_date,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            request_id = int(cur.lastrowid)
            if documents:
                cur.executemany(
                    "INSERT INTO leave_documents(request_id, name, path) VALUES(%s,%s,%s)",
                    [(request_id, d.name, d.path) for d in documents],
                )
            return request_id

    def update(self, request: LeaveRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET request_type=%s, start_date=%s, end_date=%s, reason=%s,
                    status=%s, approved_by=%s, rejection_reason=%s
                WHERE request_id=%s
                """,
                (
                    request.request_type.value,
                    request.start_date,
                    request.end_date,
                    request.reason,
                    request.status.value,
                    request.approved_by,
                    request.rejection_reason,
                    int(request.request_id),
                ),
            )
            cur.execute("SELECT 1 AS ok FROM leave_requests WHERE request_id=%s", (int(request.request_id),))
            return fetchone(cur) is not None

    def delete(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_documents WHERE request_id=%s", (int(request_id),))
            cur.execute("DELETE FROM leave_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0

    def list_for_user(self, *, user_id: int, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        where = "user_id=%s"
        params: list[object] = [int(user_id)]
        if status is not None:
            where += " AND status=%s"
            params.append(status.value)
        return self._select(where, tuple(params), "created_at DESC, request_id DESC")

    def list_by_status(self, *, status: RequestStatus) -> Sequence[LeaveRequest]:
        return self._select("status=%s", (status.value,), "created_at ASC, request_id ASC")
