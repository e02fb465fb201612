from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import structlog

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import PunchType, RecordStatus
from ..core.exceptions import ValidationError
from ..hours.encoding import format_decimal
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .state_machine import AttendanceStateMachine, TransitionResult
from .transitions.base import PunchContext

logger = structlog.get_logger(__name__)


class AttendanceService:
    """Use case: apply punches to worker-day records and persist them."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        state_machine: AttendanceStateMachine | None = None,
    ):
        self._attendance = attendance
        self._machine = state_machine or AttendanceStateMachine()

    def punch(
        self,
        *,
        worker_id: int,
        location_id: int,
        civil_date: date,
        punch: PunchType | str,
        clock: str,
    ) -> TransitionResult:
        """Validate the transition first, then write once."""
        current = self._attendance.get_for_worker_and_date(worker_id, civil_date)
        ctx = PunchContext(worker_id=worker_id, location_id=location_id, civil_date=civil_date, clock=clock)
        result = self._machine.apply(current, punch, ctx)

        if current is None:
            stored = self._attendance.create_record(result.record)
        else:
            stored = self._attendance.update_record(result.record)

        logger.info(
            "punch_recorded",
            worker_id=worker_id,
            civil_date=civil_date.isoformat(),
            punch=PunchType(punch).value,
            clock=clock,
            working_hours_display=stored.working_hours_display,
        )
        return replace(result, record=stored)

    def recompute(self, worker_id: int, civil_date: date) -> AttendanceRecord:
        """Rebuild derived hours for a stored record (maintenance after data fixes)."""
        record = self._attendance.get_for_worker_and_date(worker_id, civil_date)
        if not record:
            raise ValidationError(f"No record for worker {worker_id} on {civil_date.isoformat()}")
        result = self._machine.recompute(record)
        if result.record == record:
            return record
        return self._attendance.update_record(result.record)

    def get_today_record(self, worker_id: int, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a worker"""
        return self._attendance.get_for_worker_and_date(worker_id, today)

    def get_history_ui(
        self,
        worker_id: int,
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ):
        """Recent records for the worker view, optionally within [start, end]."""
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")
        rows = self._attendance.get_recent_for_worker(worker_id, limit, start_date=start, end_date=end)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        if r.status == RecordStatus.COMPLETED:
            label = "Completed"
        elif r.is_on_break:
            label = f"On break {r.open_break_index + 1}"
        else:
            label = "Working"

        return {
            "date": r.civil_date.strftime("%Y-%m-%d"),
            "clock_in": r.clock_in or "-",
            "clock_out": r.clock_out or "-",
            "breaks": [f"{b.start}-{b.end or '...'}" for b in r.breaks if b.start],
            "break_minutes": r.break_minutes,
            "working_hours": r.working_hours_display,
            "working_hours_decimal": format_decimal(r.working_hours_decimal),
            "status": label,
        }
