from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class PunchType(str, Enum):
    """A single worker-initiated event recorded by a scan."""

    CLOCK_IN = "CLOCK_IN"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    CLOCK_OUT = "CLOCK_OUT"


class RecordStatus(str, Enum):
    """Persisted status of a worker-day record."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class ScanWarning(str, Enum):
    """Non-fatal conditions reported alongside an accepted scan."""

    NEGATIVE_DURATION_CLAMPED = "NEGATIVE_DURATION_CLAMPED"
