from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Worker
from .repository import WorkerRepository


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, email, role, location_id, is_active
                FROM users
                WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Worker(
                user_id=int(r["user_id"]),
                full_name=r["full_name"],
                email=r["email"],
                role=Role(r["role"]),
                location_id=int(r["location_id"]) if r.get("location_id") is not None else None,
                is_active=bool(r.get("is_active", 1)),
            )
