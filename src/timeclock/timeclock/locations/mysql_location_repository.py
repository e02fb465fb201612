from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Location, LocationAssignment
from .repository import LocationRepository


def _row_to_location(r: Dict[str, Any]) -> Location:
    return Location(
        location_id=int(r["location_id"]),
        name=r["name"],
        address=r["address"],
        place_identifier=r["place_identifier"],
        branch=r.get("branch"),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, branch, address, place_identifier, is_active
                FROM locations
                WHERE location_id=%s
                """,
                (location_id,),
            )
            r = fetchone(cur)
            return _row_to_location(r) if r else None

    def get_by_place_identifier(self, place_identifier: str) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, branch, address, place_identifier, is_active
                FROM locations
                WHERE place_identifier=%s
                """,
                (place_identifier,),
            )
            r = fetchone(cur)
            return _row_to_location(r) if r else None

    def list_locations(self, *, include_inactive: bool = False) -> Sequence[Location]:
        where = "" if include_inactive else "WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT location_id, name, branch, address, place_identifier, is_active
                FROM locations
                {where}
                ORDER BY name, branch
                """
            )
            return [_row_to_location(r) for r in fetchall(cur)]

    def list_assignments_for_worker(self, worker_id: int) -> Sequence[LocationAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, location_id, start_date, end_date
                FROM location_assignments
                WHERE worker_id=%s
                ORDER BY start_date DESC
                """,
                (worker_id,),
            )
            return [
                LocationAssignment(
                    worker_id=int(r["worker_id"]),
                    location_id=int(r["location_id"]),
                    start_date=r["start_date"],
                    end_date=r.get("end_date"),
                )
                for r in fetchall(cur)
            ]
