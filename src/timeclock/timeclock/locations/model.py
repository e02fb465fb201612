from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Domain entity: a registered facility.

    `place_identifier` comes from a one-off geocoding lookup and is what the
    facility's QR code encodes.
    """

    location_id: int
    name: str
    address: str
    place_identifier: str
    branch: Optional[str] = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.branch})" if self.branch else self.name


@dataclass(frozen=True)
class LocationAssignment:
    """A worker's time-bounded binding to a location (end_date None = open-ended)."""

    worker_id: int
    location_id: int
    start_date: date
    end_date: Optional[date] = None

    def is_current(self, on_date: date) -> bool:
        return self.end_date is None or self.end_date >= on_date
