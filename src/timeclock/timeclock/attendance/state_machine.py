from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import structlog

from ..core.enums import PunchType, ScanWarning
from ..hours.calculator.base import DurationCalculator
from ..hours.calculator.standard_calculator import StandardDurationCalculator
from ..hours.model import WorkDuration
from .factory import TransitionFactory
from .model import AttendanceRecord
from .transitions.base import PunchContext

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    record: AttendanceRecord
    duration: WorkDuration
    warnings: tuple[ScanWarning, ...] = ()


class AttendanceStateMachine:
    """Lifecycle of one worker-day record: NotStarted -> Active -> Completed.

    Pure: takes the current record (or None) and returns the next one. Nothing is
    persisted here, so a rejected punch leaves no trace.
    """

    def __init__(
        self,
        *,
        calculator: DurationCalculator | None = None,
        factory: TransitionFactory | None = None,
    ):
        self._calculator = calculator or StandardDurationCalculator()
        self._factory = factory or TransitionFactory()

    def apply(
        self,
        record: Optional[AttendanceRecord],
        punch: PunchType | str,
        ctx: PunchContext,
    ) -> TransitionResult:
        transition = self._factory.for_punch(punch)
        updated = transition.apply(record, ctx)
        return self.recompute(updated)

    def recompute(self, record: AttendanceRecord) -> TransitionResult:
        """Rebuild every derived field from the raw punches."""
        duration = self._calculator.compute(
            clock_in=record.clock_in,
            clock_out=record.clock_out,
            breaks=record.breaks,
        )
        warnings: tuple[ScanWarning, ...] = ()
        if duration.clamped:
            warnings = (ScanWarning.NEGATIVE_DURATION_CLAMPED,)
            logger.warning(
                "negative_duration_clamped",
                worker_id=record.worker_id,
                civil_date=record.civil_date.isoformat(),
                clock_in=record.clock_in,
                clock_out=record.clock_out,
            )

        updated = replace(
            record,
            break_minutes=duration.break_minutes,
            working_hours_display=duration.display,
            working_hours_decimal=duration.decimal,
        )
        return TransitionResult(record=updated, duration=duration, warnings=warnings)
