from __future__ import annotations

from flask import Flask, request

from ..common.validators import parse_int
from ..common.web import current_actor, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/weekly", methods=["GET"], endpoint="weekly_report")
    @login_required
    def weekly_report():
        actor = current_actor()
        report = container.report_service.weekly(
            actor,
            user_id=parse_int(request.args.get("user_id") or actor.user_id, "user id"),
            week=request.args.get("week"),
            year=request.args.get("year"),
        )
        return ok(report.to_dict())

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    @login_required
    def monthly_report():
        actor = current_actor()
        report = container.report_service.monthly(
            actor,
            user_id=parse_int(request.args.get("user_id") or actor.user_id, "user id"),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return ok(report.to_dict())

    @app.route("/api/reports/all", methods=["GET"], endpoint="all_reports")
    @login_required
    def all_reports():
        reports = container.report_service.all_reports(
            current_actor(),
            report_type=request.args.get("type", "monthly"),
            year=request.args.get("year"),
            month=request.args.get("month"),
            week=request.args.get("week"),
        )
        return ok([r.to_dict() for r in reports], count=len(reports))
