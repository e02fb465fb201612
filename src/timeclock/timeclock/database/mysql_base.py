from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import format_clock, parse_clock
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection per unit of work: commit on success, roll back on any error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def mysql_time_to_clock(value: Any) -> Optional[str]:
    """TIME column -> "HH:MM". Seconds are dropped; punches are minute-precise."""
    if value is None:
        return None
    if isinstance(value, time):
        return format_clock(value.hour, value.minute)
    if isinstance(value, timedelta):
        # the C extension returns TIME as a timedelta since midnight
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return format_clock(*divmod(minutes, 60))
    if isinstance(value, str):
        return format_clock(*parse_clock(":".join(value.strip().split(":")[:2])))
    raise TypeError(f"Unsupported TIME value: {value!r}")
