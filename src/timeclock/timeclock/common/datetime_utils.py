"""Wall-clock helpers.

Record times are stored as facility-local "HH:MM" strings and record dates as
facility-local calendar dates. All projections from an instant go through one
IANA timezone (pytz) so DST changes are handled the same way everywhere.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

import pytz

from ..core.constants import CLOCK_FORMAT, DEFAULT_TIMEZONE
from ..core.exceptions import InvalidTimeFormat


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> tuple[int, int]:
    """Parse an "HH:MM" string into (hour, minute). Only ASCII digits count."""
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time value: {value!r}")

    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidTimeFormat(f"Invalid time value: {value!r}")

    hour, minute = int(parts[0]), int(parts[1])
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")
    return hour, minute


def to_minutes(hour: int, minute: int) -> int:
    return hour * 60 + minute


def clock_to_minutes(value: str) -> int:
    return to_minutes(*parse_clock(value))


def format_clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def get_timezone(timezone_str: str = DEFAULT_TIMEZONE):
    """Resolve an IANA timezone name; unknown names raise pytz.UnknownTimeZoneError."""
    return pytz.timezone(timezone_str)


def ensure_aware(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=pytz.UTC)
    return instant


def parse_instant(value: Union[str, datetime]) -> datetime:
    """Accept an ISO-8601 string (with optional trailing Z) or a datetime."""
    if isinstance(value, datetime):
        return ensure_aware(value)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_aware(datetime.fromisoformat(text))
    except ValueError as exc:
        raise InvalidTimeFormat(f"Invalid timestamp: {value!r}") from exc


def utc_to_local(instant: datetime, timezone_str: str = DEFAULT_TIMEZONE) -> datetime:
    return ensure_aware(instant).astimezone(get_timezone(timezone_str))


def civil_date_of(instant: datetime, timezone_str: str = DEFAULT_TIMEZONE) -> date:
    """Project an instant onto the facility's local calendar date."""
    return utc_to_local(instant, timezone_str).date()


def local_clock_of(instant: datetime, timezone_str: str = DEFAULT_TIMEZONE) -> str:
    """Project an instant onto the facility's local wall clock as "HH:MM"."""
    return utc_to_local(instant, timezone_str).strftime(CLOCK_FORMAT)


def now_utc() -> datetime:
    """Current time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)


def today_local(timezone_str: str = DEFAULT_TIMEZONE, *, now: Optional[datetime] = None) -> date:
    return civil_date_of(now or now_utc(), timezone_str)
