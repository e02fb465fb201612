from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    """Persistence keyed by (worker_id, civil_date).

    `create_record` must raise DuplicateClockIn when the key already exists
    (unique constraint). `update_record` is a compare-and-swap on `version` and
    raises ConcurrentModification when the stored version moved on.
    Both return the stored record.
    """

    def get_for_worker_and_date(self, worker_id: int, civil_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_worker(
        self,
        worker_id: int,
        limit: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first; `start_date`/`end_date` bound the range inclusively."""
        raise NotImplementedError

    def create_record(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def update_record(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        worker_id: Optional[int] = None,
        location_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
