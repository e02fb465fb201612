from __future__ import annotations

from datetime import date

import structlog

from ..common.validators import require_non_empty
from ..core.exceptions import NotAuthorizedForLocation, UnknownLocation
from ..users.repository import WorkerRepository
from .model import Location
from .repository import LocationRepository

logger = structlog.get_logger(__name__)


class LocationAuthorizationService:
    """Use case: may this worker punch at the location behind a scanned QR code?

    Two paths grant access: the worker's primary location, or any assignment to
    the location that has not ended before `on_date`. Past assignments stay valid
    after the primary location changes, so both paths are always consulted.
    """

    def __init__(self, locations: LocationRepository, workers: WorkerRepository):
        self._locations = locations
        self._workers = workers

    def resolve(self, place_identifier: str) -> Location:
        place_identifier = require_non_empty(place_identifier, "Place identifier")
        location = self._locations.get_by_place_identifier(place_identifier)
        if not location or not location.is_active:
            raise UnknownLocation(f"No registered location for {place_identifier!r}")
        return location

    def authorize(self, worker_id: int, place_identifier: str, *, on_date: date) -> Location:
        location = self.resolve(place_identifier)

        worker = self._workers.get_by_id(worker_id)
        if worker and worker.is_active and worker.location_id == location.location_id:
            return location

        for assignment in self._locations.list_assignments_for_worker(worker_id):
            if assignment.location_id == location.location_id and assignment.is_current(on_date):
                return location

        logger.warning(
            "location_not_authorized",
            worker_id=worker_id,
            location_id=location.location_id,
            on_date=on_date.isoformat(),
        )
        raise NotAuthorizedForLocation(f"Worker {worker_id} is not assigned to {location.display_name}")
