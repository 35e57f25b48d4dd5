from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import api_token_required, optional_date, required_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.analytics_service

    @app.route("/api/analytics/headcount", methods=["GET"], endpoint="analytics_headcount")
    @api_token_required
    def headcount():
        return jsonify(svc.headcount_summary(optional_date("as_of") or today_local()))

    @app.route("/api/analytics/headcount-trend", methods=["GET"], endpoint="analytics_headcount_trend")
    @api_token_required
    def headcount_trend():
        today = today_local()
        levels = request.args.getlist("level") or None
        return jsonify(svc.headcount_trend(optional_date("on") or today, today=today, levels=levels))

    @app.route("/api/analytics/additions-exits", methods=["GET"], endpoint="analytics_additions_exits")
    @api_token_required
    def additions_exits():
        return jsonify(svc.additions_and_exits(required_date("month"), up_to=optional_date("up_to")))

    @app.route("/api/analytics/leave-distribution", methods=["GET"], endpoint="analytics_leave_distribution")
    @api_token_required
    def leave_distribution():
        return jsonify(
            svc.leave_distribution(
                required_date("start"),
                required_date("end"),
                leave_type=request.args.get("leave_type") or None,
            )
        )

    @app.route("/api/analytics/regularization-top", methods=["GET"], endpoint="analytics_regularization_top")
    @api_token_required
    def regularization_top():
        rows = svc.regularization_top_requesters(
            required_date("start"),
            required_date("end"),
            reason=request.args.get("reason") or None,
            limit=request.args.get("limit", default=10, type=int),
        )
        return jsonify({"topEmployees": rows})

    @app.route("/api/analytics/unapproved-absences", methods=["GET"], endpoint="analytics_unapproved_absences")
    @api_token_required
    def unapproved_absences():
        return jsonify(svc.unapproved_absences(required_date("start"), required_date("end")))

    @app.route("/api/analytics/org-absence", methods=["GET"], endpoint="analytics_org_absence")
    @api_token_required
    def org_absence():
        days = svc.org_absence_trend(
            required_date("start"),
            required_date("end"),
            types=request.args.getlist("type") or None,
        )
        return jsonify({"days": days})

    @app.route(
        "/api/analytics/employees/<employee_code>/absences",
        methods=["GET"],
        endpoint="analytics_employee_absences",
    )
    @api_token_required
    def employee_absences(employee_code: str):
        days = svc.employee_absence_calendar(
            employee_code,
            required_date("start"),
            required_date("end"),
            types=request.args.getlist("type") or None,
        )
        return jsonify({"employeeCode": employee_code, "days": days})

    @app.route(
        "/api/analytics/employees/<employee_code>/leave-regularization",
        methods=["GET"],
        endpoint="analytics_employee_leave_regularization",
    )
    @api_token_required
    def employee_leave_regularization(employee_code: str):
        return jsonify(
            svc.employee_leave_regularization(employee_code, required_date("start"), required_date("end"))
        )
