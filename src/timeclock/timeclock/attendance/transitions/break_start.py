from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...common.datetime_utils import parse_clock
from ...core.constants import MAX_BREAKS
from ...core.enums import PunchType
from ...core.exceptions import InvalidTransition
from ..model import AttendanceRecord, BreakSlot
from .base import PunchContext, PunchTransition


class BreakStartTransition(PunchTransition):
    """Open the next unused break slot."""

    punch = PunchType.BREAK_START

    def apply(self, record: Optional[AttendanceRecord], ctx: PunchContext) -> AttendanceRecord:
        record = self.require_active(record)
        if record.is_on_break:
            raise InvalidTransition("A break is already open")
        index = record.breaks_started
        if index >= MAX_BREAKS:
            raise InvalidTransition(f"No more than {MAX_BREAKS} breaks per day")
        parse_clock(ctx.clock)

        breaks = list(record.breaks)
        breaks[index] = BreakSlot(start=ctx.clock)
        return replace(record, breaks=tuple(breaks))
