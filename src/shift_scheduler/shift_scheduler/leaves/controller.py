from __future__ import annotations

from flask import Flask, request

from ..common.validators import parse_int
from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @login_required
    def list_leave_requests():
        actor = current_actor()
        requests = container.leave_service.list_for_user(
            actor,
            user_id=parse_int(request.args.get("user_id") or actor.user_id, "user id"),
            status=request.args.get("status"),
        )
        return ok([r.to_dict() for r in requests], count=len(requests))

    @app.route("/api/leave-requests/pending", methods=["GET"], endpoint="list_pending_leave_requests")
    @login_required
    def list_pending_leave_requests():
        requests = container.leave_service.list_pending(current_actor())
        return ok([r.to_dict() for r in requests], count=len(requests))

    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        body = json_body()
        leave = container.leave_service.create(
            current_actor(),
            request_type=body.get("request_type"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            reason=body.get("reason", ""),
            documents=body.get("documents") or (),
        )
        return ok(leave.to_dict(), 201)

    @app.route("/api/leave-requests/<int:request_id>", methods=["PUT"], endpoint="update_leave_request")
    @login_required
    def update_leave_request(request_id: int):
        body = json_body()
        leave = container.leave_service.update(
            current_actor(),
            request_id=request_id,
            request_type=body.get("request_type"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            reason=body.get("reason"),
            status=body.get("status"),
            rejection_reason=body.get("rejection_reason"),
        )
        return ok(leave.to_dict())

    @app.route("/api/leave-requests/<int:request_id>", methods=["DELETE"], endpoint="delete_leave_request")
    @login_required
    def delete_leave_request(request_id: int):
        container.leave_service.delete(current_actor(), request_id=request_id)
        return ok(message="Leave request deleted")
