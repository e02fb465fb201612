from __future__ import annotations

from dataclasses import replace

import pytest
from flask import Flask

from src.timeclock.timeclock.container import Container
from src.timeclock.timeclock.hours.controller import register as register_hours
from src.timeclock.timeclock.hours.report_service import HoursReportService
from src.timeclock.timeclock.locations.controller import register as register_locations
from src.timeclock.timeclock.scans.controller import register as register_scans

from tests.conftest import HQ_PLACE, SYDNEY


@pytest.fixture
def client(workers_repo, locations_repo, attendance_repo, attendance_service, coordinator):
    container = Container(
        conn=None,
        timezone=SYDNEY,
        qr_box_size=4,
        workers_repo=workers_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        authorization_service=None,
        scan_coordinator=coordinator,
        hours_report_service=HoursReportService(attendance_repo),
    )
    app = Flask(__name__)
    app.secret_key = "test"
    register_scans(app, container)
    register_hours(app, container)
    register_locations(app, container)
    return app.test_client()


def sign_in(client, user_id=1, role="EMPLOYEE"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_scan_requires_login(client):
    resp = client.post("/api/scan", json={"place_identifier": HQ_PLACE, "punch_type": "CLOCK_IN"})

    assert resp.status_code == 401


def test_scan_and_read_back(client):
    sign_in(client)

    resp = client.post(
        "/api/scan",
        json={"place_identifier": HQ_PLACE, "punch_type": "CLOCK_IN", "timestamp": "2026-03-05T21:28:00Z"},
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["data"]["date"] == "2026-03-06"
    assert body["data"]["clock_in"] == "08:28"
    assert body["warnings"] == []

    history = client.get("/api/records/history").get_json()["data"]
    assert [row["status"] for row in history] == ["Working"]


def test_scan_without_timestamp_lands_on_today(client):
    sign_in(client)

    client.post("/api/scan", json={"place_identifier": HQ_PLACE, "punch_type": "CLOCK_IN"})
    today = client.get("/api/records/today").get_json()

    assert today["data"]["status"] == "ACTIVE"


def test_scan_errors_map_to_http_status(client):
    sign_in(client)
    payload = {"place_identifier": HQ_PLACE, "punch_type": "CLOCK_IN", "timestamp": "2026-03-05T21:28:00Z"}
    client.post("/api/scan", json=payload)

    dup = client.post("/api/scan", json=payload)
    unknown = client.post("/api/scan", json={**payload, "place_identifier": "ChIJ-nowhere"})
    missing = client.post("/api/scan", json={"punch_type": "CLOCK_IN"})

    assert (dup.status_code, dup.get_json()["error"]) == (409, "DUPLICATE_CLOCK_IN")
    assert (unknown.status_code, unknown.get_json()["error"]) == (404, "UNKNOWN_LOCATION")
    assert (missing.status_code, missing.get_json()["error"]) == (400, "VALIDATION_ERROR")


def test_reports_are_admin_only(client):
    sign_in(client)

    assert client.get("/admin/reports/hours").status_code == 403
    assert client.get("/admin/locations/10/qr.png").status_code == 403


def test_admin_hours_report_and_exports(client):
    sign_in(client)
    for punch, ts in (("CLOCK_IN", "2026-03-05T21:28:00Z"), ("CLOCK_OUT", "2026-03-06T06:00:00Z")):
        client.post("/api/scan", json={"place_identifier": HQ_PLACE, "punch_type": punch, "timestamp": ts})
    sign_in(client, user_id=99, role="ADMIN")

    report = client.get("/admin/reports/hours?start=2026-03-01&end=2026-03-07").get_json()
    xlsx = client.get("/admin/reports/hours.xlsx?start=2026-03-01&end=2026-03-07")
    qr = client.get("/admin/locations/10/qr.png")
    bad = client.get("/admin/reports/hours?start=March")

    assert report["rows"][0]["working_hours"] == "8.32"
    assert report["summary"][0]["total_hours_decimal"] == 8.53
    assert xlsx.status_code == 200
    assert xlsx.data[:2] == b"PK"
    assert qr.mimetype == "image/png"
    assert client.get("/admin/locations/999/qr.png").status_code == 404
    assert bad.status_code == 400


def test_history_limit_must_be_positive(client):
    sign_in(client)

    resp = client.get("/api/records/history?limit=0")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "VALIDATION_ERROR"


def test_history_accepts_a_week_range(client):
    sign_in(client)
    for ts in ("2026-03-01T21:00:00Z", "2026-03-09T21:00:00Z"):
        client.post("/api/scan", json={"place_identifier": HQ_PLACE, "punch_type": "CLOCK_IN", "timestamp": ts})

    week = client.get("/api/records/history?start=2026-03-02&end=2026-03-08").get_json()["data"]
    bad = client.get("/api/records/history?start=last-week")
    inverted = client.get("/api/records/history?start=2026-03-08&end=2026-03-02")

    assert [row["date"] for row in week] == ["2026-03-02"]
    assert bad.status_code == 400
    assert inverted.status_code == 400


def test_admin_lists_locations_for_report_filter(client, locations_repo, warehouse):
    locations_repo.locations[20] = replace(warehouse, is_active=False)
    sign_in(client, user_id=99, role="ADMIN")

    active = client.get("/admin/locations").get_json()["data"]
    everything = client.get("/admin/locations?all=1").get_json()["data"]

    assert active == [
        {
            "location_id": 10,
            "display_name": "Head Office (Sydney CBD)",
            "place_identifier": HQ_PLACE,
            "is_active": True,
        }
    ]
    assert [loc["display_name"] for loc in everything] == ["Head Office (Sydney CBD)", "Warehouse"]


def test_location_listing_is_admin_only(client):
    sign_in(client)

    assert client.get("/admin/locations").status_code == 403
