from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...common.datetime_utils import clock_to_minutes
from ...core.enums import PunchType
from ...core.exceptions import InvalidTransition
from ..model import AttendanceRecord, BreakSlot
from .base import PunchContext, PunchTransition


class BreakEndTransition(PunchTransition):
    """Close the most recently opened break slot."""

    punch = PunchType.BREAK_END

    def apply(self, record: Optional[AttendanceRecord], ctx: PunchContext) -> AttendanceRecord:
        record = self.require_active(record)
        index = record.open_break_index
        if index is None:
            raise InvalidTransition("No open break to end")

        slot = record.breaks[index]
        if clock_to_minutes(ctx.clock) < clock_to_minutes(slot.start):
            raise InvalidTransition(f"Break end {ctx.clock} is before break start {slot.start}")

        breaks = list(record.breaks)
        breaks[index] = BreakSlot(start=slot.start, end=ctx.clock)
        return replace(record, breaks=tuple(breaks))
