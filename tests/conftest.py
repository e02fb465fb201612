from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest
import pytz

from src.timeclock.timeclock.attendance.model import AttendanceRecord, AttendanceReportRow
from src.timeclock.timeclock.attendance.service import AttendanceService
from src.timeclock.timeclock.core.enums import Role
from src.timeclock.timeclock.core.exceptions import ConcurrentModification, DuplicateClockIn
from src.timeclock.timeclock.locations.model import Location, LocationAssignment
from src.timeclock.timeclock.locations.service import LocationAuthorizationService
from src.timeclock.timeclock.scans.service import ScanIntakeCoordinator
from src.timeclock.timeclock.users.model import Worker

SYDNEY = "Australia/Sydney"
HQ_PLACE = "ChIJ-head-office"
WAREHOUSE_PLACE = "ChIJ-warehouse"


def sydney_instant(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    """Aware UTC instant for a Sydney wall-clock time."""
    local = pytz.timezone(SYDNEY).localize(datetime(year, month, day, hour, minute))
    return local.astimezone(pytz.UTC)


@dataclass
class InMemoryWorkers:
    workers: dict[int, Worker]

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        return self.workers.get(user_id)


@dataclass
class InMemoryLocations:
    locations: dict[int, Location]
    assignments: list[LocationAssignment] = field(default_factory=list)

    def get_by_id(self, location_id: int) -> Optional[Location]:
        return self.locations.get(location_id)

    def get_by_place_identifier(self, place_identifier: str) -> Optional[Location]:
        for loc in self.locations.values():
            if loc.place_identifier == place_identifier:
                return loc
        return None

    def list_locations(self, *, include_inactive: bool = False):
        found = [loc for loc in self.locations.values() if include_inactive or loc.is_active]
        return sorted(found, key=lambda loc: (loc.name, loc.branch or ""))

    def list_assignments_for_worker(self, worker_id: int):
        return [a for a in self.assignments if a.worker_id == worker_id]


class InMemoryAttendance:
    """Mirrors the MySQL repository contract: unique key + version check."""

    def __init__(self, workers: InMemoryWorkers | None = None, locations: InMemoryLocations | None = None):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._workers = workers
        self._locations = locations
        self.writes = 0

    def get_for_worker_and_date(self, worker_id: int, civil_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((worker_id, civil_date))

    def get_recent_for_worker(self, worker_id: int, limit: int, *, start_date=None, end_date=None):
        items = [
            r
            for r in self._by_key.values()
            if r.worker_id == worker_id
            and (start_date is None or r.civil_date >= start_date)
            and (end_date is None or r.civil_date <= end_date)
        ]
        items.sort(key=lambda r: r.civil_date, reverse=True)
        return items[:limit]

    def create_record(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.worker_id, record.civil_date)
        if key in self._by_key:
            raise DuplicateClockIn("duplicate key")
        self._id += 1
        stored = replace(record, attendance_id=self._id, version=0)
        self._by_key[key] = stored
        self.writes += 1
        return stored

    def update_record(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.worker_id, record.civil_date)
        current = self._by_key.get(key)
        if current is None or current.version != record.version:
            raise ConcurrentModification("stale version")
        stored = replace(record, version=record.version + 1)
        self._by_key[key] = stored
        self.writes += 1
        return stored

    def get_report_rows(self, *, start_date, end_date, worker_id=None, location_id=None):
        rows = []
        for rec in sorted(self._by_key.values(), key=lambda r: r.civil_date, reverse=True):
            if not start_date <= rec.civil_date <= end_date:
                continue
            if worker_id is not None and rec.worker_id != worker_id:
                continue
            if location_id is not None and rec.location_id != location_id:
                continue
            worker = self._workers.get_by_id(rec.worker_id)
            location = self._locations.get_by_id(rec.location_id)
            rows.append(
                AttendanceReportRow(
                    worker_id=rec.worker_id,
                    full_name=worker.full_name,
                    email=worker.email,
                    location_name=location.display_name,
                    record=rec,
                )
            )
        return rows


@pytest.fixture
def hq() -> Location:
    return Location(location_id=10, name="Head Office", branch="Sydney CBD", address="1 Martin Pl", place_identifier=HQ_PLACE)


@pytest.fixture
def warehouse() -> Location:
    return Location(location_id=20, name="Warehouse", address="10 Church St", place_identifier=WAREHOUSE_PLACE)


@pytest.fixture
def workers_repo() -> InMemoryWorkers:
    return InMemoryWorkers(
        {
            1: Worker(user_id=1, full_name="Jae Kim", email="jae@example.com", role=Role.EMPLOYEE, location_id=10),
            2: Worker(user_id=2, full_name="Sol Park", email="sol@example.com", role=Role.EMPLOYEE, location_id=None),
        }
    )


@pytest.fixture
def locations_repo(hq, warehouse) -> InMemoryLocations:
    return InMemoryLocations({hq.location_id: hq, warehouse.location_id: warehouse})


@pytest.fixture
def attendance_repo(workers_repo, locations_repo) -> InMemoryAttendance:
    return InMemoryAttendance(workers_repo, locations_repo)


@pytest.fixture
def attendance_service(attendance_repo) -> AttendanceService:
    return AttendanceService(attendance_repo)


@pytest.fixture
def coordinator(attendance_service, locations_repo, workers_repo) -> ScanIntakeCoordinator:
    auth = LocationAuthorizationService(locations_repo, workers_repo)
    return ScanIntakeCoordinator(attendance_service, auth, timezone=SYDNEY)


@pytest.fixture
def fixed_now() -> datetime:
    # 08:28 AEDT on 6 March 2026 (still 5 March in UTC).
    return sydney_instant(2026, 3, 6, 8, 28)


@pytest.fixture
def sydney():
    return sydney_instant
