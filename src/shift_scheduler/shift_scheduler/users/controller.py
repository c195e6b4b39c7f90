from __future__ import annotations

from flask import Flask, session

from ..common.web import current_actor, json_body, login_required, login_session, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        user = container.auth_service.register(
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
        )
        login_session(user)
        return ok({"id": user.user_id, "name": user.name, "role": user.role.value}, 201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        login_session(user)
        return ok({"id": user.user_id, "name": user.name, "role": user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    @login_required
    def auth_profile():
        user = container.user_service.get_profile(current_actor())
        return ok(user.profile())

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_update_profile")
    @login_required
    def auth_update_profile():
        body = json_body()
        user = container.user_service.update_profile(
            current_actor(),
            name=body.get("name"),
            email=body.get("email"),
            department=body.get("department"),
            position=body.get("position"),
        )
        session["name"] = user.name
        return ok(user.profile())

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        users = container.user_service.list_users(current_actor())
        return ok([u.profile() for u in users], count=len(users))
