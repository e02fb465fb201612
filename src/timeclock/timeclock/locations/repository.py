from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Location, LocationAssignment


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def get_by_place_identifier(self, place_identifier: str) -> Optional[Location]:
        raise NotImplementedError

    def list_assignments_for_worker(self, worker_id: int) -> Sequence[LocationAssignment]:
        raise NotImplementedError

    def list_locations(self, *, include_inactive: bool = False) -> Sequence[Location]:
        raise NotImplementedError
