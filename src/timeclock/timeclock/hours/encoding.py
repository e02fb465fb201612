"""Dual encoding of worked time.

display: whole hours, a dot, then the leftover minutes verbatim as two digits
(483 min -> "8.03"). It is a label, never a number.

decimal: true hours (483 min -> 8.05). The only value safe to add up.
"""
from __future__ import annotations

from typing import Iterable

from ..core.constants import DISPLAY_DECIMAL_PLACES


def encode_display(net_minutes: int) -> str:
    hours, minutes = divmod(max(int(net_minutes), 0), 60)
    return f"{hours}.{minutes:02d}"


def encode_decimal(net_minutes: int) -> float:
    hours, minutes = divmod(max(int(net_minutes), 0), 60)
    return hours + minutes / 60.0


def format_decimal(value: float) -> str:
    return f"{value:.{DISPLAY_DECIMAL_PLACES}f}"


def display_to_minutes(display: str) -> int:
    """Decode a display label back into minutes ("8.03" -> 483)."""
    hours, _, minutes = display.partition(".")
    return int(hours) * 60 + int(minutes or 0)


def sum_decimal_hours(values: Iterable[float]) -> float:
    return sum(float(v) for v in values)
