from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...common.datetime_utils import parse_clock
from ...core.enums import PunchType, RecordStatus
from ...core.exceptions import InvalidTransition
from ..model import AttendanceRecord
from .base import PunchContext, PunchTransition


class ClockOutTransition(PunchTransition):
    """Active -> Completed. An open break stays open and counts as 0 minutes."""

    punch = PunchType.CLOCK_OUT

    def apply(self, record: Optional[AttendanceRecord], ctx: PunchContext) -> AttendanceRecord:
        record = self.require_active(record)
        if not record.clock_in:
            raise InvalidTransition("Cannot clock out without a clock-in")
        parse_clock(ctx.clock)
        return replace(record, clock_out=ctx.clock, status=RecordStatus.COMPLETED)
