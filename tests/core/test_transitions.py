from __future__ import annotations

import pytest

from src.shift_scheduler.shift_scheduler.core.enums import RequestStatus, Role
from src.shift_scheduler.shift_scheduler.core.exceptions import InvalidTransition, PermissionDenied, ValidationError
from src.shift_scheduler.shift_scheduler.core.transitions import can_transition, check_transition

PENDING = RequestStatus.PENDING
APPROVED = RequestStatus.APPROVED
REJECTED = RequestStatus.REJECTED


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (PENDING, PENDING, True),
        (PENDING, APPROVED, True),
        (PENDING, REJECTED, True),
        (APPROVED, APPROVED, True),
        (APPROVED, REJECTED, True),
        (APPROVED, PENDING, False),
        (REJECTED, PENDING, False),
        (REJECTED, APPROVED, False),
        (REJECTED, REJECTED, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_admin_can_approve_pending():
    check_transition(current=PENDING, target=APPROVED, role=Role.ADMIN)


def test_employee_cannot_change_status():
    with pytest.raises(PermissionDenied):
        check_transition(current=PENDING, target=APPROVED, role=Role.EMPLOYEE)


def test_employee_keeps_pending_status_while_editing():
    check_transition(current=PENDING, target=PENDING, role=Role.EMPLOYEE)


def test_rejected_is_terminal_even_for_admins():
    with pytest.raises(InvalidTransition) as exc_info:
        check_transition(current=REJECTED, target=APPROVED, role=Role.ADMIN)

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.kind == "validation_error"
