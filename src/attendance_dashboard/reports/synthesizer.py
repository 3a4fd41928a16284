"""Merge a period's punch feed with the roster into one row per employee.

Rows for employees present in the feed come first, in feed order; roster
employees with no feed entry follow as synthesized ``absent`` rows, in
roster order. Feed employees missing from the roster (deleted accounts)
still get a row, with a placeholder shift and times shown in UTC.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..attendance.model import ZERO_METRICS, DailyMetrics, PunchRecord
from ..common.datetime_utils import to_zoned_hhmm
from ..common.formatting import fmt_shift
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import RowStatus
from ..users.model import EmployeeSummary
from ..users.service import index_by_uid
from .model import DailyReportEntry, DailyReportRow, EmployeeInfo, WeeklyReportEntry, WeeklyReportRow


@dataclass
class _Merged:
    uid: str
    employee: EmployeeInfo
    metrics: DailyMetrics
    punches: list[PunchRecord] = field(default_factory=list)
    days_worked: int = 0


def classify(punches: Sequence[PunchRecord]) -> RowStatus:
    """``absent`` without punches, ``complete`` when every punch has a punch-out, else ``incomplete``."""
    if not punches:
        return RowStatus.ABSENT
    if all(p.punch_out is not None for p in punches):
        return RowStatus.COMPLETE
    return RowStatus.INCOMPLETE


def _merge(entries: Iterable[tuple[str, EmployeeInfo, DailyMetrics, Sequence[PunchRecord], int]]) -> list[_Merged]:
    merged: dict[str, _Merged] = {}
    for uid, employee, metrics, punches, days in entries:
        m = merged.get(uid)
        if m is None:
            merged[uid] = _Merged(uid=uid, employee=employee, metrics=metrics, punches=list(punches), days_worked=days)
            continue
        m.metrics = m.metrics + metrics
        m.punches.extend(punches)
        m.days_worked += days
    return list(merged.values())


def _identity(info: EmployeeInfo, known: Optional[EmployeeSummary]) -> tuple[str, str, str]:
    first = info.first_name or (known.first_name if known else "")
    last = info.last_name or (known.last_name if known else "")
    department = info.department or (known.department if known else "")
    position = info.position or (known.position if known else "")
    return f"{first} {last}".strip(), department, position


def _present_fields(m: _Merged, known: Optional[EmployeeSummary]) -> dict:
    name, department, position = _identity(m.employee, known)
    tz = known.timezone if known else DEFAULT_TIMEZONE
    latest = m.punches[-1] if m.punches else None
    return {
        "uid": m.uid,
        "name": name,
        "department": department,
        "position": position,
        "shift": known.shift_label if known else fmt_shift(None, None),
        "time_in": to_zoned_hhmm(latest.punch_in, tz) if latest else None,
        "time_out": to_zoned_hhmm(latest.punch_out, tz) if latest and latest.punch_out else None,
        "metrics": m.metrics,
        "status": classify(m.punches),
        "punch_count": len(m.punches),
    }


def _absent_fields(u: EmployeeSummary) -> dict:
    return {
        "uid": u.uid,
        "name": u.full_name,
        "department": u.department,
        "position": u.position,
        "shift": u.shift_label,
        "time_in": None,
        "time_out": None,
        "metrics": ZERO_METRICS,
        "status": RowStatus.ABSENT,
        "punch_count": 0,
    }


def _absentees(roster: Sequence[EmployeeSummary], present: set[str]) -> list[EmployeeSummary]:
    seen: set[str] = set()
    out = []
    for u in roster:
        if u.uid in present or u.uid in seen:
            continue
        seen.add(u.uid)
        out.append(u)
    return out


def synthesize_daily_rows(
    feed: Sequence[DailyReportEntry],
    roster: Sequence[EmployeeSummary],
) -> list[DailyReportRow]:
    merged = _merge((e.uid, e.employee, e.metrics, e.punches, 1) for e in feed)
    by_uid = index_by_uid(roster)

    rows = [DailyReportRow(**_present_fields(m, by_uid.get(m.uid))) for m in merged]
    present = {m.uid for m in merged}
    rows.extend(DailyReportRow(**_absent_fields(u)) for u in _absentees(roster, present))
    return rows


def synthesize_weekly_rows(
    feed: Sequence[WeeklyReportEntry],
    roster: Sequence[EmployeeSummary],
) -> list[WeeklyReportRow]:
    merged = _merge(
        (e.uid, e.employee, e.totals, e.punches, sum(1 for d in e.days if d.punches)) for e in feed
    )
    by_uid = index_by_uid(roster)

    rows = [WeeklyReportRow(days_worked=m.days_worked, **_present_fields(m, by_uid.get(m.uid))) for m in merged]
    present = {m.uid for m in merged}
    rows.extend(WeeklyReportRow(**_absent_fields(u)) for u in _absentees(roster, present))
    return rows


def filter_rows(rows: Sequence[DailyReportRow | WeeklyReportRow], query: str) -> list:
    """Case-insensitive search on name or department."""
    q = (query or "").strip().lower()
    if not q:
        return list(rows)
    return [r for r in rows if q in r.name.lower() or q in r.department.lower()]
