from __future__ import annotations

from typing import Sequence

from ..core.enums import RowStatus
from .model import ReportRow, ReportTotals


def compute_totals(rows: Sequence[ReportRow]) -> ReportTotals:
    """Dashboard summary figures over synthesized rows.

    The average of regular hours only counts rows with regular hours > 0;
    with no such row it is 0.0.
    """

    regular = overtime = night_diff = 0.0
    late_count = absent_count = late_minutes = undertime_minutes = 0
    with_hours: list[float] = []

    for r in rows:
        m = r.metrics
        regular += m.regular_hours
        overtime += m.overtime_hours
        night_diff += m.night_diff_hours
        late_minutes += m.late_minutes
        undertime_minutes += m.undertime_minutes
        if m.late_minutes > 0:
            late_count += 1
        if r.status == RowStatus.ABSENT:
            absent_count += 1
        if m.regular_hours > 0:
            with_hours.append(m.regular_hours)

    average = sum(with_hours) / len(with_hours) if with_hours else 0.0

    return ReportTotals(
        regular_hours=regular,
        overtime_hours=overtime,
        night_diff_hours=night_diff,
        late_count=late_count,
        absent_count=absent_count,
        present_count=len(rows) - absent_count,
        employee_count=len(rows),
        late_minutes=late_minutes,
        undertime_minutes=undertime_minutes,
        average_regular_hours=average,
    )
