from __future__ import annotations

from dataclasses import asdict, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.shift_scheduler.shift_scheduler.container import assemble
from src.shift_scheduler.shift_scheduler.core.enums import RequestStatus, Role
from src.shift_scheduler.shift_scheduler.core.exceptions import Conflict
from src.shift_scheduler.shift_scheduler.leaves.model import LeaveRequest
from src.shift_scheduler.shift_scheduler.shifts.model import NewShift, Shift
from src.shift_scheduler.shift_scheduler.users.model import SessionUser, User


class InMemoryUsers:
    def __init__(self, users=()):
        self._users: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._users, default=0) + 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, department=None, position=None) -> int:
        if self.get_by_email(email):
            raise Conflict("User already exists with this email")
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            position=position,
        )
        return user_id

    def update_profile(self, user_id, *, name, email, department, position) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, name=name, email=email, department=department, position=position)
        return True

    def list_all(self):
        return sorted(self._users.values(), key=lambda u: (u.name, u.user_id))


class InMemoryShifts:
    def __init__(self):
        self._rows: dict[int, Shift] = {}
        self._next_id = 1
        self.fail_bulk_writes = False

    def all(self) -> list[Shift]:
        return sorted(self._rows.values(), key=lambda s: (s.work_date, s.start_time, s.shift_id))

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._rows.get(int(shift_id))

    def find_one(self, *, user_id, work_date, shift_type) -> Optional[Shift]:
        return next(
            (
                s
                for s in self.all()
                if s.user_id == int(user_id) and s.work_date == work_date and s.shift_type == shift_type
            ),
            None,
        )

    def list_for_user(self, *, user_id, start, end, status=None):
        return [s for s in self.list_range(start=start, end=end, status=status) if s.user_id == int(user_id)]

    def list_range(self, *, start, end, status=None):
        return [
            s
            for s in self.all()
            if start <= s.work_date <= end and (status is None or s.status == status)
        ]

    def create(self, shift: NewShift) -> int:
        if self.find_one(user_id=shift.user_id, work_date=shift.work_date, shift_type=shift.shift_type):
            raise Conflict("A shift of this type already exists for this date")
        shift_id = self._next_id
        self._next_id += 1
        self._rows[shift_id] = Shift(shift_id=shift_id, **asdict(shift))
        return shift_id

    def create_many(self, shifts) -> int:
        if self.fail_bulk_writes:
            raise RuntimeError("database unavailable")
        for s in shifts:
            self.create(s)
        return len(shifts)

    def update(self, shift: Shift) -> bool:
        if shift.shift_id not in self._rows:
            return False
        self._rows[shift.shift_id] = shift
        return True

    def delete(self, shift_id: int) -> bool:
        return self._rows.pop(int(shift_id), None) is not None

    def delete_with_note(self, *, user_id, shift_type, start, end, note) -> int:
        if self.fail_bulk_writes:
            raise RuntimeError("database unavailable")
        doomed = [
            s.shift_id
            for s in self._rows.values()
            if s.user_id == int(user_id)
            and s.shift_type == shift_type
            and start <= s.work_date <= end
            and note in (s.notes or "")
        ]
        for shift_id in doomed:
            del self._rows[shift_id]
        return len(doomed)


class InMemoryLeaves:
    def __init__(self):
        self._rows: dict[int, LeaveRequest] = {}
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, 9, 0)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self._rows.get(int(request_id))

    def create(self, *, user_id, request_type, start_date, end_date, reason, documents=()) -> int:
        request_id = self._next_id
        self._next_id += 1
        self._clock += timedelta(minutes=1)
        self._rows[request_id] = LeaveRequest(
            request_id=request_id,
            user_id=int(user_id),
            request_type=request_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=RequestStatus.PENDING,
            documents=tuple(documents),
            created_at=self._clock,
        )
        return request_id

    def update(self, request: LeaveRequest) -> bool:
        if request.request_id not in self._rows:
            return False
        self._rows[request.request_id] = request
        return True

    def delete(self, request_id: int) -> bool:
        return self._rows.pop(int(request_id), None) is not None

    def list_for_user(self, *, user_id, status=None):
        rows = [
            r
            for r in self._rows.values()
            if r.user_id == int(user_id) and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: (r.created_at or datetime.min, r.request_id), reverse=True)

    def list_by_status(self, *, status):
        rows = [r for r in self._rows.values() if r.status == status]
        return sorted(rows, key=lambda r: (r.created_at or datetime.min, r.request_id))

    def insert(self, request: LeaveRequest) -> LeaveRequest:
        """Store a request as-is, bypassing the create() defaults."""
        self._rows[request.request_id] = request
        self._next_id = max(self._next_id, request.request_id + 1)
        return request


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            User(
                user_id=1,
                name="Ada Admin",
                email="admin@example.com",
                password_hash=generate_password_hash("admin123"),
                role=Role.ADMIN,
                department="Operations",
                position="Shift Manager",
            ),
            User(
                user_id=2,
                name="Eve Employee",
                email="eve@example.com",
                password_hash=generate_password_hash("employee123"),
                role=Role.EMPLOYEE,
                department="Operations",
                position="Operator",
            ),
            User(
                user_id=3,
                name="Olly Other",
                email="olly@example.com",
                password_hash=generate_password_hash("employee123"),
                role=Role.EMPLOYEE,
            ),
        ]
    )


@pytest.fixture
def shifts_repo():
    return InMemoryShifts()


@pytest.fixture
def leaves_repo():
    return InMemoryLeaves()


@pytest.fixture
def container(users_repo, shifts_repo, leaves_repo):
    return assemble(users_repo=users_repo, shifts_repo=shifts_repo, leaves_repo=leaves_repo)


@pytest.fixture
def admin():
    return SessionUser(user_id=1, name="Ada Admin", role=Role.ADMIN)


@pytest.fixture
def employee():
    return SessionUser(user_id=2, name="Eve Employee", role=Role.EMPLOYEE)


@pytest.fixture
def other_employee():
    return SessionUser(user_id=3, name="Olly Other", role=Role.EMPLOYEE)


@pytest.fixture
def today():
    return date(2024, 6, 3)
