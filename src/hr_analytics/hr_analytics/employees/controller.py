from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import api_token_required, optional_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/status/update", methods=["POST"], endpoint="update_employee_statuses")
    @api_token_required
    def update_employee_statuses():
        as_of = optional_date("as_of") or today_local()
        results = container.lifecycle_job.run(as_of=as_of)
        ok = sum(1 for r in results if r.success)
        message = f"Updated {ok} employees" if results else "No employees to update"
        return jsonify(
            {
                "success": True,
                "asOf": as_of.isoformat(),
                "message": message,
                "count": ok,
                "results": [r.to_dict() for r in results],
            }
        )

    @app.route("/api/employees/<int:employee_id>/status", methods=["PATCH"], endpoint="update_employee_status")
    @api_token_required
    def update_employee_status(employee_id: int):
        data = request.get_json(silent=True) or {}
        emp = container.employee_service.update_status(
            employee_id=employee_id,
            status=str(data.get("status") or ""),
            date_of_exit=optional_date("date_of_exit", source=data),
            actor=data.get("updated_by") or request.headers.get("X-Actor") or None,
        )
        return jsonify(
            {
                "success": True,
                "employeeId": emp.employee_id,
                "status": emp.status.value,
                "dateOfExit": emp.date_of_exit.isoformat() if emp.date_of_exit else None,
            }
        )
