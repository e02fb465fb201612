from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import ScanWarning
from ..core.exceptions import DomainError


@dataclass(frozen=True)
class ScanResult:
    """Typed outcome of one scan: either an updated record or an error code."""

    ok: bool
    record: Optional[AttendanceRecord] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    warnings: tuple[ScanWarning, ...] = ()

    @classmethod
    def success(cls, record: AttendanceRecord, warnings: tuple[ScanWarning, ...] = ()) -> "ScanResult":
        return cls(ok=True, record=record, warnings=warnings)

    @classmethod
    def failure(cls, error: DomainError) -> "ScanResult":
        return cls(ok=False, error_code=error.code, message=str(error))
