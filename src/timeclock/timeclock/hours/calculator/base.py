from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...attendance.model import BreakSlot
from ..model import WorkDuration


class DurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def compute(
        self,
        *,
        clock_in: Optional[str],
        clock_out: Optional[str],
        breaks: Sequence[BreakSlot],
    ) -> WorkDuration:
        raise NotImplementedError
