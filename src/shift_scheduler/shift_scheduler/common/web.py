"""Helpers shared by the JSON controllers."""

from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..users.model import SessionUser


def login_session(user: SessionUser) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = int(user.user_id)
    session["name"] = user.name
    session["role"] = user.role.value


def current_actor() -> SessionUser:
    if "user_id" not in session:
        raise AuthenticationError("Not authenticated")
    return SessionUser(
        user_id=int(session["user_id"]),
        name=session.get("name", ""),
        role=Role(session.get("role", Role.EMPLOYEE.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_actor()
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data=None, status_code: int = 200, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload), status_code
