from __future__ import annotations

from flask import Flask, request

from ..common.validators import parse_int
from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @login_required
    def list_shifts():
        actor = current_actor()
        shifts = container.shift_service.list_for_user(
            actor,
            user_id=parse_int(request.args.get("user_id") or actor.user_id, "user id"),
            start=request.args.get("start_date"),
            end=request.args.get("end_date"),
        )
        return ok([s.to_dict() for s in shifts], count=len(shifts))

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    @login_required
    def create_shift():
        actor = current_actor()
        body = json_body()
        shift = container.shift_service.create(
            actor,
            user_id=parse_int(body.get("user_id") or actor.user_id, "user id"),
            work_date=body.get("date"),
            shift_type=body.get("shift_type"),
            notes=body.get("notes"),
        )
        return ok(shift.to_dict(), 201)

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="update_shift")
    @login_required
    def update_shift(shift_id: int):
        body = json_body()
        shift = container.shift_service.update(
            current_actor(),
            shift_id=shift_id,
            shift_type=body.get("shift_type"),
            work_date=body.get("date"),
            notes=body.get("notes"),
            status=body.get("status"),
        )
        return ok(shift.to_dict())

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @login_required
    def delete_shift(shift_id: int):
        container.shift_service.delete(current_actor(), shift_id=shift_id)
        return ok(message="Shift deleted")

    @app.route("/api/shifts/calendar", methods=["GET"], endpoint="shift_calendar")
    @login_required
    def shift_calendar():
        days = container.shift_service.calendar(
            current_actor(),
            start=request.args.get("start_date"),
            end=request.args.get("end_date"),
        )
        return ok([d.to_dict() for d in days])
