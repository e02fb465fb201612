from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...core.enums import PunchType
from ...core.exceptions import InvalidTransition
from ..model import AttendanceRecord


@dataclass(frozen=True)
class PunchContext:
    worker_id: int
    location_id: int
    civil_date: date
    clock: str


class PunchTransition(ABC):
    """Strategy Pattern: one state-machine edge per punch type.

    `apply` returns the mutated record without derived fields; the state machine
    recomputes durations afterwards.
    """

    punch: PunchType

    @abstractmethod
    def apply(self, record: Optional[AttendanceRecord], ctx: PunchContext) -> AttendanceRecord:
        raise NotImplementedError

    def require_active(self, record: Optional[AttendanceRecord]) -> AttendanceRecord:
        if record is None:
            raise InvalidTransition(f"{self.punch.value} requires clocking in first")
        if record.is_completed:
            raise InvalidTransition(f"{self.punch.value} not allowed: already clocked out")
        return record
