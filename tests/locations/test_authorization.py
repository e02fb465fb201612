from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.timeclock.timeclock.core.exceptions import NotAuthorizedForLocation, UnknownLocation, ValidationError
from src.timeclock.timeclock.locations.model import LocationAssignment
from src.timeclock.timeclock.locations.qr import make_location_qr_png
from src.timeclock.timeclock.locations.service import LocationAuthorizationService

from tests.conftest import HQ_PLACE, WAREHOUSE_PLACE

DAY = date(2026, 3, 6)


@pytest.fixture
def auth(locations_repo, workers_repo):
    return LocationAuthorizationService(locations_repo, workers_repo)


def test_primary_location_is_authorized(auth, hq):
    assert auth.authorize(1, HQ_PLACE, on_date=DAY) == hq


def test_other_location_without_assignment_is_rejected(auth):
    with pytest.raises(NotAuthorizedForLocation):
        auth.authorize(1, WAREHOUSE_PLACE, on_date=DAY)


def test_open_ended_assignment_is_authorized(auth, locations_repo, warehouse):
    locations_repo.assignments.append(LocationAssignment(worker_id=2, location_id=20, start_date=date(2026, 1, 1)))

    assert auth.authorize(2, WAREHOUSE_PLACE, on_date=DAY) == warehouse


def test_assignment_ending_today_is_still_current(auth, locations_repo, warehouse):
    locations_repo.assignments.append(
        LocationAssignment(worker_id=2, location_id=20, start_date=date(2026, 1, 1), end_date=DAY)
    )

    assert auth.authorize(2, WAREHOUSE_PLACE, on_date=DAY) == warehouse


def test_expired_assignment_is_rejected(auth, locations_repo):
    locations_repo.assignments.append(
        LocationAssignment(worker_id=2, location_id=20, start_date=date(2026, 1, 1), end_date=date(2026, 3, 5))
    )

    with pytest.raises(NotAuthorizedForLocation):
        auth.authorize(2, WAREHOUSE_PLACE, on_date=DAY)


def test_assignment_keeps_access_after_primary_moves(auth, locations_repo, workers_repo, hq):
    workers_repo.workers[1] = replace(workers_repo.workers[1], location_id=20)
    locations_repo.assignments.append(LocationAssignment(worker_id=1, location_id=10, start_date=date(2025, 7, 1)))

    assert auth.authorize(1, HQ_PLACE, on_date=DAY) == hq


def test_inactive_worker_needs_an_assignment(auth, workers_repo):
    workers_repo.workers[1] = replace(workers_repo.workers[1], is_active=False)

    with pytest.raises(NotAuthorizedForLocation):
        auth.authorize(1, HQ_PLACE, on_date=DAY)


def test_unknown_place_identifier(auth):
    with pytest.raises(UnknownLocation):
        auth.authorize(1, "ChIJ-nowhere", on_date=DAY)


def test_inactive_location_is_unknown(auth, locations_repo, hq):
    locations_repo.locations[10] = replace(hq, is_active=False)

    with pytest.raises(UnknownLocation):
        auth.resolve(HQ_PLACE)


def test_blank_place_identifier(auth):
    with pytest.raises(ValidationError):
        auth.resolve("   ")


def test_display_name_includes_branch(hq, warehouse):
    assert hq.display_name == "Head Office (Sydney CBD)"
    assert warehouse.display_name == "Warehouse"


def test_location_qr_is_png(hq):
    png = make_location_qr_png(hq, box_size=4)

    assert png.startswith(b"\x89PNG\r\n\x1a\n")
