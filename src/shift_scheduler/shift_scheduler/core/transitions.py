"""Status state machine shared by shifts and leave requests.

``pending`` may move to ``approved`` or ``rejected``; ``approved`` may be
re-approved (side effects re-run idempotently) or rejected; ``rejected`` is
terminal. Only admins move a record out of its current status.
"""

from __future__ import annotations

from .enums import RequestStatus, Role
from .exceptions import InvalidTransition, PermissionDenied

ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.PENDING, RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.REJECTED: frozenset(),
}


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def check_transition(*, current: RequestStatus, target: RequestStatus, role: Role) -> None:
    if role != Role.ADMIN and target != current:
        raise PermissionDenied("Only an admin can change the status")

    if not can_transition(current, target):
        raise InvalidTransition(f"Cannot change status from {current.value} to {target.value}")
