from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.state_machine import AttendanceStateMachine
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .hours.calculator.standard_calculator import StandardDurationCalculator
from .hours.report_service import HoursReportService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.service import LocationAuthorizationService
from .scans.service import ScanIntakeCoordinator
from .users.mysql_user_repository import MySQLWorkerRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    timezone: str
    qr_box_size: int

    workers_repo: MySQLWorkerRepository
    locations_repo: MySQLLocationRepository
    attendance_repo: MySQLAttendanceRepository

    attendance_service: AttendanceService
    authorization_service: LocationAuthorizationService
    scan_coordinator: ScanIntakeCoordinator
    hours_report_service: HoursReportService


def build_container(*, db_config: dict, timezone: str = DEFAULT_TIMEZONE, qr_box_size: int = 10) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    locations_repo = MySQLLocationRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        state_machine=AttendanceStateMachine(calculator=StandardDurationCalculator()),
    )
    authorization_service = LocationAuthorizationService(locations_repo, workers_repo)
    scan_coordinator = ScanIntakeCoordinator(attendance_service, authorization_service, timezone=timezone)
    hours_report_service = HoursReportService(attendance_repo)

    return Container(
        conn=conn,
        timezone=timezone,
        qr_box_size=int(qr_box_size),
        workers_repo=workers_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        authorization_service=authorization_service,
        scan_coordinator=scan_coordinator,
        hours_report_service=hours_report_service,
    )
