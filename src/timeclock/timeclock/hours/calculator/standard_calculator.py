from __future__ import annotations

from typing import Optional, Sequence

from ...attendance.model import BreakSlot
from ...common.datetime_utils import clock_to_minutes
from ..encoding import encode_decimal, encode_display
from ..model import WorkDuration
from .base import DurationCalculator


class StandardDurationCalculator(DurationCalculator):
    """Standard rule: (out - in) - closed breaks, not below 0.

    Breaks are summed independently; overlapping breaks are not merged.
    """

    def break_minutes(self, breaks: Sequence[BreakSlot]) -> int:
        total = 0
        for slot in breaks:
            if not slot.is_closed:
                continue
            total += max(0, clock_to_minutes(slot.end) - clock_to_minutes(slot.start))
        return total

    def compute(
        self,
        *,
        clock_in: Optional[str],
        clock_out: Optional[str],
        breaks: Sequence[BreakSlot],
    ) -> WorkDuration:
        break_minutes = self.break_minutes(breaks)

        span = 0
        clamped = False
        if clock_in and clock_out:
            span = clock_to_minutes(clock_out) - clock_to_minutes(clock_in)
            if span < 0:
                span, clamped = 0, True

        net = max(0, span - break_minutes)
        return WorkDuration(
            total_span_minutes=span,
            break_minutes=break_minutes,
            net_minutes=net,
            display=encode_display(net),
            decimal=encode_decimal(net),
            clamped=clamped,
        )
