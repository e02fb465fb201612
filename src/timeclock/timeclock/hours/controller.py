from __future__ import annotations

import io
from datetime import timedelta

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.web import admin_required
from ..container import Container
from .export import export_hours_xlsx


def register(app: Flask, container: Container) -> None:
    def _report_args():
        end = request.args.get("end")
        start = request.args.get("start")
        end_date = parse_iso_date(end) if end else today_local(container.timezone)
        start_date = parse_iso_date(start) if start else end_date - timedelta(days=6)
        return {
            "start": start_date,
            "end": end_date,
            "worker_id": request.args.get("worker_id", type=int),
            "location_id": request.args.get("location_id", type=int),
        }

    @app.route("/admin/reports/hours", methods=["GET"], endpoint="admin_hours_report")
    @admin_required
    def admin_hours_report():
        try:
            args = _report_args()
        except ValueError:
            return jsonify({"success": False, "message": "Dates must be YYYY-MM-DD"}), 400
        data = container.hours_report_service.build_hours_report(**args)
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary}), 200

    @app.route("/admin/reports/hours.xlsx", methods=["GET"], endpoint="admin_hours_export")
    @admin_required
    def admin_hours_export():
        try:
            args = _report_args()
        except ValueError:
            return jsonify({"success": False, "message": "Dates must be YYYY-MM-DD"}), 400
        data = container.hours_report_service.build_hours_report(**args)
        filename = f"attendance_{args['start'].strftime('%Y%m%d')}_{args['end'].strftime('%Y%m%d')}.xlsx"
        return send_file(
            io.BytesIO(export_hours_xlsx(data)),
            download_name=filename,
            as_attachment=True,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
