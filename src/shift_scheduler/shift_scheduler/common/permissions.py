from __future__ import annotations

from ..core.enums import RequestStatus
from ..core.exceptions import PermissionDenied
from ..users.model import SessionUser


def ensure_admin(actor: SessionUser, message: str = "Admin access required") -> None:
    if not actor.is_admin:
        raise PermissionDenied(message)


def ensure_owner_or_admin(actor: SessionUser, owner_id: int, message: str = "Not authorized to access this record") -> None:
    if not actor.is_admin and int(actor.user_id) != int(owner_id):
        raise PermissionDenied(message)


def ensure_can_modify(actor: SessionUser, *, owner_id: int, status: RequestStatus, what: str) -> None:
    """Non-admins act only on their own records, and only while those are pending."""

    ensure_owner_or_admin(actor, owner_id, f"Not authorized to modify this {what}")
    if not actor.is_admin and status != RequestStatus.PENDING:
        raise PermissionDenied(f"Cannot modify {status.value} {what}")
