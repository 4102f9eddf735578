from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import isoformat_or_none, parse_iso_date
from ..common.validators import optional_device_id, require_coordinates, require_year_month
from ..container import Container
from ..core.claims import SessionClaims

PREFIX = "/api/attendance"


def register(app: Flask, container: Container) -> None:
    def current_claims() -> SessionClaims:
        return SessionClaims.from_session(session)

    def location_payload():
        data = request.get_json(silent=True) or {}
        location = require_coordinates(data.get("lat"), data.get("lng"))
        return location, optional_device_id(data.get("deviceId"))

    @app.route(f"{PREFIX}/checkin", methods=["POST"], endpoint="attendance_checkin")
    def checkin():
        claims = current_claims()
        location, device_id = location_payload()
        outcome = container.state_machine.check_in(
            claims,
            location=location,
            device_id=device_id,
            policy=container.shift_policy,
        )
        return jsonify(
            {
                "message": "Checked in successfully",
                "distanceMeters": outcome.distance_m,
                "late": outcome.late,
                "checkIn": isoformat_or_none(outcome.check_in),
            }
        )

    @app.route(f"{PREFIX}/checkout", methods=["POST"], endpoint="attendance_checkout")
    def checkout():
        claims = current_claims()
        location, device_id = location_payload()
        outcome = container.state_machine.check_out(
            claims,
            location=location,
            device_id=device_id,
            policy=container.shift_policy,
        )
        return jsonify(
            {
                "message": "Checked out successfully",
                "distanceMeters": outcome.distance_m,
                "early": outcome.early,
                "checkOut": isoformat_or_none(outcome.check_out),
                "workMinutes": outcome.work_minutes,
            }
        )

    @app.route(f"{PREFIX}/break-start", methods=["POST"], endpoint="attendance_break_start")
    def break_start():
        container.state_machine.break_start(current_claims(), policy=container.shift_policy)
        return jsonify({"message": "Break started"})

    @app.route(f"{PREFIX}/break-end", methods=["POST"], endpoint="attendance_break_end")
    def break_end():
        container.state_machine.break_end(current_claims(), policy=container.shift_policy)
        return jsonify({"message": "Break ended"})

    @app.route(f"{PREFIX}/today", methods=["GET"], endpoint="attendance_today")
    def today():
        return jsonify(container.attendance_service.get_today(current_claims(), policy=container.shift_policy))

    @app.route(f"{PREFIX}/date/<work_date>", methods=["GET"], endpoint="attendance_by_date")
    def by_date(work_date: str):
        claims = current_claims()
        day = parse_iso_date(work_date)
        return jsonify(container.attendance_service.get_by_date(claims, day, policy=container.shift_policy))

    @app.route(f"{PREFIX}/history", methods=["GET"], endpoint="attendance_history")
    def history():
        return jsonify(container.attendance_service.get_history(current_claims(), policy=container.shift_policy))

    @app.route(f"{PREFIX}/month", methods=["GET"], endpoint="attendance_month")
    def month():
        claims = current_claims()
        year, month_no = require_year_month(request.args.get("year"), request.args.get("month"))
        days = container.attendance_service.get_month(claims, year=year, month=month_no)
        return jsonify([d.to_dict() for d in days])

    @app.route(f"{PREFIX}/analytics", methods=["GET"], endpoint="attendance_analytics")
    @app.route(f"{PREFIX}/my/analytics", methods=["GET"], endpoint="attendance_my_analytics")
    def analytics():
        claims = current_claims()
        return jsonify(
            container.analytics_service.work_analytics(
                claims,
                policy=container.shift_policy,
                range_name=request.args.get("range"),
            )
        )
