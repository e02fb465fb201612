from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.constants import MAX_BREAKS
from ..core.enums import RecordStatus
from ..core.exceptions import ConcurrentModification, DuplicateClockIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_clock
from .model import AttendanceRecord, AttendanceReportRow, BreakSlot
from .repository import AttendanceRepository

_BREAK_COLUMNS = ", ".join(f"break_start_{i}, break_end_{i}" for i in range(1, MAX_BREAKS + 1))
_AR_BREAK_COLUMNS = ", ".join(f"ar.break_start_{i}, ar.break_end_{i}" for i in range(1, MAX_BREAKS + 1))

_RECORD_COLUMNS = (
    "ar.attendance_id, ar.worker_id, ar.location_id, ar.civil_date, "
    f"ar.clock_in, ar.clock_out, {_AR_BREAK_COLUMNS}, "
    "ar.break_minutes, ar.working_hours_display, ar.working_hours_decimal, ar.status, ar.version"
)

# MySQL error 1062: duplicate entry for a unique key.
ER_DUP_ENTRY = 1062


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    breaks = tuple(
        BreakSlot(
            start=mysql_time_to_clock(r.get(f"break_start_{i}")),
            end=mysql_time_to_clock(r.get(f"break_end_{i}")),
        )
        for i in range(1, MAX_BREAKS + 1)
    )
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        worker_id=int(r["worker_id"]),
        location_id=int(r["location_id"]),
        civil_date=r["civil_date"],
        clock_in=mysql_time_to_clock(r.get("clock_in")),
        clock_out=mysql_time_to_clock(r.get("clock_out")),
        breaks=breaks,
        break_minutes=int(r.get("break_minutes") or 0),
        working_hours_display=str(r.get("working_hours_display") or "0.00"),
        working_hours_decimal=float(r.get("working_hours_decimal") or 0.0),
        status=RecordStatus(r["status"]),
        version=int(r.get("version") or 0),
    )


def _break_params(record: AttendanceRecord) -> list[Optional[str]]:
    params: list[Optional[str]] = []
    for slot in record.breaks:
        params.extend([slot.start, slot.end])
    return params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_worker_and_date(self, worker_id: int, civil_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.worker_id=%s AND ar.civil_date=%s
                """,
                (worker_id, civil_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_worker(
        self,
        worker_id: int,
        limit: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.worker_id=%s"]
        params: list[object] = [worker_id]
        if start_date is not None:
            clauses.append("ar.civil_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.civil_date <= %s")
            params.append(end_date)
        params.append(int(limit))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE {where}
                ORDER BY ar.civil_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_record(self, record: AttendanceRecord) -> AttendanceRecord:
        placeholders = ", ".join(["%s"] * (2 * MAX_BREAKS))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO attendance_records(
                        worker_id, location_id, civil_date, clock_in, clock_out, {_BREAK_COLUMNS},
                        break_minutes, working_hours_display, working_hours_decimal, status, version
                    )
                    VALUES(%s,%s,%s,%s,%s,{placeholders},%s,%s,%s,%s,0)
                    """,
                    (
                        record.worker_id,
                        record.location_id,
                        record.civil_date,
                        record.clock_in,
                        record.clock_out,
                        *_break_params(record),
                        record.break_minutes,
                        record.working_hours_display,
                        record.working_hours_decimal,
                        record.status.value,
                    ),
                )
                new_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if getattr(exc, "errno", None) == ER_DUP_ENTRY:
                raise DuplicateClockIn(f"Already clocked in on {record.civil_date.isoformat()}") from exc
            raise

        return replace(record, attendance_id=new_id, version=0)

    def update_record(self, record: AttendanceRecord) -> AttendanceRecord:
        assignments = ", ".join(f"break_start_{i}=%s, break_end_{i}=%s" for i in range(1, MAX_BREAKS + 1))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, {assignments},
                    break_minutes=%s, working_hours_display=%s, working_hours_decimal=%s,
                    status=%s, version=version+1
                WHERE attendance_id=%s AND version=%s
                """,
                (
                    record.clock_in,
                    record.clock_out,
                    *_break_params(record),
                    record.break_minutes,
                    record.working_hours_display,
                    record.working_hours_decimal,
                    record.status.value,
                    record.attendance_id,
                    record.version,
                ),
            )
            if cur.rowcount == 0:
                raise ConcurrentModification(
                    f"Record {record.attendance_id} changed since it was read; retry the scan"
                )

        return replace(record, version=record.version + 1)

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        worker_id: Optional[int] = None,
        location_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.civil_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if worker_id is not None:
            clauses.append("ar.worker_id=%s")
            params.append(int(worker_id))
        if location_id is not None:
            clauses.append("ar.location_id=%s")
            params.append(int(location_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_RECORD_COLUMNS},
                    u.full_name, u.email,
                    l.name AS location_name, l.branch AS location_branch
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.worker_id
                JOIN locations l ON l.location_id = ar.location_id
                WHERE {where}
                ORDER BY ar.civil_date DESC, u.full_name ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    worker_id=int(r["worker_id"]),
                    full_name=r["full_name"],
                    email=r["email"],
                    location_name=(
                        f"{r['location_name']} ({r['location_branch']})"
                        if r.get("location_branch")
                        else r["location_name"]
                    ),
                    record=_row_to_record(r),
                )
                for r in rows
            ]
