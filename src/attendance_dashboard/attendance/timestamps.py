"""Rebuild an absolute instant from a wall-clock ``HH:MM`` typed by an admin.

The calendar date is kept as the original instant shows it in the
employee's zone, so editing 09:00 -> 09:30 never moves the punch to another
day just because the zone is far from UTC.
"""
from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import parse_hhmm
from ..core.exceptions import ValidationError


def _correct(candidate: datetime, intended: datetime, zone: ZoneInfo) -> datetime:
    # intended is naive local wall-clock; compare with what the zone shows
    shown = candidate.astimezone(zone).replace(tzinfo=None)
    return candidate + (intended - shown)


def _reads(instant: datetime, zone: ZoneInfo, wanted: time) -> bool:
    local = instant.astimezone(zone)
    return (local.hour, local.minute) == (wanted.hour, wanted.minute)


def rebuild_instant(original: datetime, hhmm: str, tz_name: Optional[str] = None) -> datetime:
    """Return the instant that reads ``hhmm`` in ``tz_name`` on the original's local date.

    Without a zone, ``hhmm`` is applied as UTC wall-clock time to the
    original's UTC date.

    With a zone, a candidate is built from the local date and ``hhmm`` read
    as UTC, then shifted by the signed difference between the intended
    wall-clock and the one the zone shows for the candidate. When a DST
    change falls between the candidate and the shifted instant, one more
    correction is applied using the offset at the shifted instant. Local
    times inside a spring-forward gap resolve past the gap; ambiguous
    fall-back times resolve to their first occurrence.
    """

    wanted = parse_hhmm(hhmm)
    utc_original = original.astimezone(timezone.utc)

    if not tz_name:
        return utc_original.replace(hour=wanted.hour, minute=wanted.minute, second=0, microsecond=0)

    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {tz_name}")
    local_date = utc_original.astimezone(zone).date()
    intended = datetime.combine(local_date, wanted)
    candidate = intended.replace(tzinfo=timezone.utc)

    first = _correct(candidate, intended, zone)
    if _reads(first, zone, wanted):
        return first

    second = _correct(first, intended, zone)
    if _reads(second, zone, wanted):
        return second
    return first
