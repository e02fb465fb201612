from __future__ import annotations

from datetime import datetime
from typing import Union

import structlog

from ..attendance.service import AttendanceService
from ..common.datetime_utils import civil_date_of, local_clock_of, parse_instant
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import PunchType
from ..core.exceptions import DomainError, InvalidTransition
from ..locations.service import LocationAuthorizationService
from .locks import KeyedLock
from .model import ScanResult

logger = structlog.get_logger(__name__)


class ScanIntakeCoordinator:
    """Single entry point for a scan: authorize, punch, persist.

    Scans for the same (worker, civil date) run one at a time in this process;
    across processes the store's unique key and version check take over.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        authorization: LocationAuthorizationService,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        locks: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._authorization = authorization
        self._timezone = timezone
        self._locks = locks or KeyedLock()

    def handle_scan(
        self,
        worker_id: int,
        place_identifier: str,
        punch_type: Union[PunchType, str],
        client_timestamp: Union[datetime, str],
    ) -> ScanResult:
        log = logger.bind(worker_id=worker_id, place_identifier=place_identifier, punch_type=str(punch_type))
        try:
            punch = self._parse_punch(punch_type)
            instant = parse_instant(client_timestamp)
            civil_date = civil_date_of(instant, self._timezone)
            clock = local_clock_of(instant, self._timezone)

            location = self._authorization.authorize(worker_id, place_identifier, on_date=civil_date)

            with self._locks.hold((worker_id, civil_date)):
                result = self._attendance.punch(
                    worker_id=worker_id,
                    location_id=location.location_id,
                    civil_date=civil_date,
                    punch=punch,
                    clock=clock,
                )
        except DomainError as e:
            log.warning("scan_rejected", error_code=e.code, reason=str(e))
            return ScanResult.failure(e)

        log.info(
            "scan_accepted",
            civil_date=civil_date.isoformat(),
            clock=clock,
            status=result.record.status.value,
            warnings=[w.value for w in result.warnings],
        )
        return ScanResult.success(result.record, result.warnings)

    @staticmethod
    def _parse_punch(punch_type: Union[PunchType, str]) -> PunchType:
        if isinstance(punch_type, PunchType):
            return punch_type
        try:
            return PunchType(str(punch_type).strip().upper())
        except ValueError:
            raise InvalidTransition(f"Unsupported punch type: {punch_type!r}") from None
