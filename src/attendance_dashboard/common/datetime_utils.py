from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant from the service into an aware UTC datetime.

    Naive values are read as UTC.
    """
    v = value.strip()
    if v.endswith("Z") or v.endswith("z"):
        v = v[:-1] + "+00:00"
    dt = datetime.fromisoformat(v)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_optional_instant(value: Optional[str]) -> Optional[datetime]:
    return parse_instant(value) if value else None


def format_instant(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_hhmm(value: str, field_name: str = "Time") -> time:
    m = _HHMM.match((value or "").strip())
    if not m:
        raise ValidationError(f"{field_name} must be a valid time (HH:MM)")
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def resolve_zone(name: Optional[str]) -> ZoneInfo:
    """ZoneInfo for ``name``; unknown or empty names fall back to the default zone."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo(DEFAULT_TIMEZONE)


def is_known_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def to_zoned_hhmm(instant: datetime, tz_name: Optional[str] = None) -> str:
    """24h ``HH:MM`` of ``instant`` as shown in ``tz_name`` (UTC when missing)."""
    return instant.astimezone(resolve_zone(tz_name)).strftime("%H:%M")


def now_utc() -> datetime:
    """Current time, aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def week_bounds(ref: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``ref``."""
    monday = ref - timedelta(days=ref.weekday())
    return monday, monday + timedelta(days=6)


def shift_day(ref: date, direction: int) -> date:
    return ref + timedelta(days=direction)


def shift_week(start: date, direction: int) -> tuple[date, date]:
    return week_bounds(start + timedelta(days=7 * direction))


def today_in(tz_name: Optional[str] = None) -> date:
    """Calendar date it currently is in ``tz_name``."""
    return now_utc().astimezone(resolve_zone(tz_name)).date()
