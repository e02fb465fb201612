from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import PunchType
from ..core.exceptions import InvalidTransition
from .transitions.base import PunchTransition
from .transitions.break_end import BreakEndTransition
from .transitions.break_start import BreakStartTransition
from .transitions.clock_in import ClockInTransition
from .transitions.clock_out import ClockOutTransition


def _default_transitions() -> dict[PunchType, PunchTransition]:
    return {
        PunchType.CLOCK_IN: ClockInTransition(),
        PunchType.BREAK_START: BreakStartTransition(),
        PunchType.BREAK_END: BreakEndTransition(),
        PunchType.CLOCK_OUT: ClockOutTransition(),
    }


@dataclass
class TransitionFactory:
    """Factory Pattern: choose the transition for a punch type."""

    transitions: dict[PunchType, PunchTransition] = field(default_factory=_default_transitions)

    def for_punch(self, punch: PunchType | str) -> PunchTransition:
        try:
            punch = PunchType(punch)
        except ValueError:
            raise InvalidTransition(f"Unsupported punch type: {punch!r}") from None
        return self.transitions[punch]
