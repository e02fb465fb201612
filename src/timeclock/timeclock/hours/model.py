from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkDuration:
    """Derived durations for one record.

    `display` is a label ("8.32" means 8 h 32 min); only `decimal` is summable.
    `clamped` is set when clock-out preceded clock-in and the span was forced to 0.
    """

    total_span_minutes: int
    break_minutes: int
    net_minutes: int
    display: str
    decimal: float
    clamped: bool = False
