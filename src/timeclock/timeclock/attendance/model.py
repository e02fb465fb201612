from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MAX_BREAKS
from ..core.enums import RecordStatus


@dataclass(frozen=True)
class BreakSlot:
    """One break pair; a slot with only a start is an open break."""

    start: Optional[str] = None
    end: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.start is not None and self.end is None

    @property
    def is_closed(self) -> bool:
        return self.start is not None and self.end is not None


def empty_breaks() -> tuple[BreakSlot, ...]:
    return tuple(BreakSlot() for _ in range(MAX_BREAKS))


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker-day attendance record.

    `working_hours_display` is the "hours.MM" string (fraction digits are literal
    minutes) and must never be used in arithmetic; totals are built from
    `working_hours_decimal`.
    """

    attendance_id: Optional[int]
    worker_id: int
    location_id: int
    civil_date: date
    clock_in: Optional[str]
    clock_out: Optional[str] = None
    breaks: tuple[BreakSlot, ...] = field(default_factory=empty_breaks)
    break_minutes: int = 0
    working_hours_display: str = "0.00"
    working_hours_decimal: float = 0.0
    status: RecordStatus = RecordStatus.ACTIVE
    version: int = 0

    @property
    def breaks_started(self) -> int:
        return sum(1 for b in self.breaks if b.start is not None)

    @property
    def open_break_index(self) -> Optional[int]:
        """Index of the most recently opened slot if it is still open."""
        started = self.breaks_started
        if started == 0:
            return None
        last = started - 1
        return last if self.breaks[last].is_open else None

    @property
    def is_on_break(self) -> bool:
        return self.open_break_index is not None

    @property
    def is_completed(self) -> bool:
        return self.status == RecordStatus.COMPLETED


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (joined with worker and location)."""

    worker_id: int
    full_name: str
    email: str
    location_name: str
    record: AttendanceRecord
