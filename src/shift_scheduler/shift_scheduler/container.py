from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_RANGE_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .leaves.repository import LeaveRequestRepository
from .leaves.service import LeaveRequestService
from .reports.service import ReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    shifts_repo: ShiftRepository
    leaves_repo: LeaveRequestRepository

    auth_service: AuthService
    user_service: UserService
    shift_service: ShiftService
    leave_service: LeaveRequestService
    report_service: ReportService


def assemble(
    *,
    users_repo: UserRepository,
    shifts_repo: ShiftRepository,
    leaves_repo: LeaveRequestRepository,
    conn: Optional[DatabaseConnection] = None,
    default_range_days: int = DEFAULT_RANGE_DAYS,
) -> Container:
    """Wire services over the given repositories."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        leaves_repo=leaves_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        shift_service=ShiftService(shifts_repo, users_repo, default_range_days=default_range_days),
        leave_service=LeaveRequestService(leaves_repo, shifts_repo),
        report_service=ReportService(shifts_repo, users_repo),
    )


def build_container(*, db_config: dict, default_range_days: int = DEFAULT_RANGE_DAYS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        leaves_repo=MySQLLeaveRequestRepository(conn),
        conn=conn,
        default_range_days=default_range_days,
    )
