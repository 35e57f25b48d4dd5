from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_token_required, required_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reconciliation", methods=["POST"], endpoint="reconcile")
    @api_token_required
    def reconcile():
        result = container.reconciliation_engine.reconcile(
            start_date=required_date("start_date"),
            end_date=required_date("end_date"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/reconciliation/employee/<employee_code>", methods=["POST"], endpoint="reconcile_employee")
    @api_token_required
    def reconcile_employee(employee_code: str):
        result = container.reconciliation_engine.reconcile_employee(
            employee_code=employee_code,
            start_date=required_date("start_date"),
            end_date=required_date("end_date"),
        )
        if result is None:
            return "", 204
        return jsonify(result.to_dict())

    @app.route("/api/coverage/rebuild", methods=["POST"], endpoint="rebuild_coverage")
    @api_token_required
    def rebuild_coverage():
        rows = container.coverage_service.rebuild_cache(
            start_date=required_date("start_date"),
            end_date=required_date("end_date"),
        )
        return jsonify({"success": True, "rows": rows})
