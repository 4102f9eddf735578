from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.claims import SessionClaims

PREFIX = "/api/admin/attendance"


def register(app: Flask, container: Container) -> None:
    """Manual attendance endpoints for HR and org admins.

    The role check lives in AdminAttendanceService so it also guards callers
    that bypass HTTP.
    """

    def current_claims() -> SessionClaims:
        return SessionClaims.from_session(session)

    @app.route(f"{PREFIX}/mark", methods=["POST"], endpoint="admin_attendance_mark")
    def mark():
        claims = current_claims()
        data = request.get_json(silent=True) or {}
        attendance_id = container.admin_service.mark_attendance(
            claims,
            employee_id=data.get("employee_id"),
            work_date=data.get("date"),
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            status=data.get("status"),
            policy=container.shift_policy,
        )
        return jsonify({"message": "Attendance marked", "id": attendance_id})

    @app.route(f"{PREFIX}/update/<int:attendance_id>", methods=["PUT"], endpoint="admin_attendance_update")
    def update(attendance_id: int):
        claims = current_claims()
        data = request.get_json(silent=True) or {}
        container.admin_service.update_record(
            claims,
            attendance_id=attendance_id,
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            status=data.get("status"),
            policy=container.shift_policy,
        )
        return jsonify({"message": "Attendance updated", "id": attendance_id})

    @app.route(f"{PREFIX}/month", methods=["GET"], endpoint="admin_attendance_month")
    def month():
        days = container.admin_service.month_for_employee(
            current_claims(),
            employee_id=request.args.get("employee_id"),
            year=request.args.get("year"),
            month=request.args.get("month"),
        )
        return jsonify([d.to_dict() for d in days])

    @app.route(f"{PREFIX}/list", methods=["GET"], endpoint="admin_attendance_list")
    def list_all():
        rows = container.admin_service.list_all(
            current_claims(),
            date_from=request.args.get("date_from"),
            date_to=request.args.get("date_to"),
        )
        return jsonify(rows)
