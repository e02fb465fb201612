from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.web import admin_required
from ..container import Container
from .qr import make_location_qr_png


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/locations", methods=["GET"], endpoint="admin_locations")
    @admin_required
    def admin_locations():
        """Locations for the report filter; `?all=1` also lists inactive ones."""
        include_inactive = request.args.get("all", default=0, type=int) == 1
        data = [
            {
                "location_id": loc.location_id,
                "display_name": loc.display_name,
                "place_identifier": loc.place_identifier,
                "is_active": loc.is_active,
            }
            for loc in container.locations_repo.list_locations(include_inactive=include_inactive)
        ]
        return jsonify({"success": True, "data": data}), 200

    @app.route("/admin/locations/<int:location_id>/qr.png", endpoint="admin_location_qr")
    @admin_required
    def admin_location_qr(location_id: int):
        """QR code to print and post at the facility."""
        location = container.locations_repo.get_by_id(location_id)
        if not location:
            return jsonify({"success": False, "message": "Location not found"}), 404

        png = make_location_qr_png(location, box_size=container.qr_box_size)
        return send_file(io.BytesIO(png), mimetype="image/png")
