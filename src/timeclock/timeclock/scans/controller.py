from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_utc, parse_iso_date, today_local
from ..common.validators import require_non_empty, require_positive_int
from ..common.web import SESSION_USER_ID, error_response, http_status_for, login_required
from ..core.exceptions import ValidationError
from ..container import Container


def _record_json(record) -> dict:
    return {
        "attendance_id": record.attendance_id,
        "worker_id": record.worker_id,
        "location_id": record.location_id,
        "date": record.civil_date.isoformat(),
        "clock_in": record.clock_in,
        "clock_out": record.clock_out,
        "breaks": [{"start": b.start, "end": b.end} for b in record.breaks],
        "break_minutes": record.break_minutes,
        "working_hours_display": record.working_hours_display,
        "working_hours_decimal": record.working_hours_decimal,
        "status": record.status.value,
    }


def _date_arg(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    @login_required
    def api_scan():
        """Apply one decoded QR scan for the signed-in worker."""
        data = request.get_json(silent=True) or {}
        try:
            place_identifier = require_non_empty(data.get("place_identifier", ""), "Place identifier")
            punch_type = require_non_empty(data.get("punch_type", ""), "Punch type")
        except ValidationError as e:
            return error_response(e)

        result = container.scan_coordinator.handle_scan(
            int(session[SESSION_USER_ID]),
            place_identifier,
            punch_type,
            data.get("timestamp") or now_utc(),
        )
        if not result.ok:
            return (
                jsonify({"success": False, "error": result.error_code, "message": result.message}),
                http_status_for(result.error_code),
            )

        return jsonify(
            {
                "success": True,
                "data": _record_json(result.record),
                "warnings": [w.value for w in result.warnings],
            }
        ), 200

    @app.route("/api/records/today", methods=["GET"], endpoint="api_records_today")
    @login_required
    def api_records_today():
        today = today_local(container.timezone)
        record = container.attendance_service.get_today_record(int(session[SESSION_USER_ID]), today)
        return jsonify({"success": True, "data": _record_json(record) if record else None}), 200

    @app.route("/api/records/history", methods=["GET"], endpoint="api_records_history")
    @login_required
    def api_records_history():
        """Recent records; `start`/`end` (YYYY-MM-DD) select a week or any other range."""
        try:
            limit = require_positive_int(request.args.get("limit", 15), "Limit")
            start = _date_arg("start")
            end = _date_arg("end")
            data = container.attendance_service.get_history_ui(
                int(session[SESSION_USER_ID]), limit=limit, start=start, end=end
            )
        except ValidationError as e:
            return error_response(e)
        return jsonify({"success": True, "data": data}), 200
