from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.permissions import ensure_admin
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, Conflict, NotFound
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _normalize_email(email: Optional[str]) -> str:
    return require_non_empty(email, "Email").lower()


class AuthService:
    """Use case: register and authenticate users (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, name: str, email: str, password: str) -> SessionUser:
        name = require_non_empty(name, "Name")
        email = _normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise Conflict("User already exists with this email")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
        )
        logger.info("user registered", extra={"user_id": user_id})
        return SessionUser(user_id=int(user_id), name=name, role=Role.EMPLOYEE)

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: read and edit user profiles."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, actor: SessionUser) -> User:
        user = self._users.get_by_id(int(actor.user_id))
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(
        self,
        actor: SessionUser,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> User:
        user = self.get_profile(actor)

        changes: dict = {}
        if name:
            changes["name"] = require_non_empty(name, "Name")
        if email:
            new_email = _normalize_email(email)
            if new_email != user.email:
                other = self._users.get_by_email(new_email)
                if other and other.user_id != user.user_id:
                    raise Conflict("Email is already in use")
            changes["email"] = new_email
        if department:
            changes["department"] = department.strip()
        if position:
            changes["position"] = position.strip()

        updated = replace(user, **changes)
        if not self._users.update_profile(
            user.user_id,
            name=updated.name,
            email=updated.email,
            department=updated.department,
            position=updated.position,
        ):
            raise NotFound("User not found")
        return updated

    def list_users(self, actor: SessionUser) -> list[User]:
        ensure_admin(actor, "Not authorized to list users")
        return list(self._users.list_all())
