from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import parse_clock
from ...core.enums import PunchType, RecordStatus
from ...core.exceptions import DuplicateClockIn
from ..model import AttendanceRecord
from .base import PunchContext, PunchTransition


class ClockInTransition(PunchTransition):
    """NotStarted -> Active."""

    punch = PunchType.CLOCK_IN

    def apply(self, record: Optional[AttendanceRecord], ctx: PunchContext) -> AttendanceRecord:
        if record is not None:
            raise DuplicateClockIn(f"Already clocked in on {ctx.civil_date.isoformat()}")
        parse_clock(ctx.clock)
        return AttendanceRecord(
            attendance_id=None,
            worker_id=ctx.worker_id,
            location_id=ctx.location_id,
            civil_date=ctx.civil_date,
            clock_in=ctx.clock,
            status=RecordStatus.ACTIVE,
        )
