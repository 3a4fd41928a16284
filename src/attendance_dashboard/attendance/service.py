from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date, to_zoned_hhmm, week_bounds
from ..common.formatting import fmt_hours
from ..core.exceptions import NotFoundError
from .model import ZERO_METRICS, DailySummary, PunchRecord, WeeklySummary
from .repository import AttendanceRepository


class AttendanceService:
    """Employee-facing summaries. A 404 from the service means "nothing yet"."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def get_daily_summary(self, work_date: date) -> DailySummary:
        try:
            return self._attendance.get_daily_summary(work_date)
        except NotFoundError:
            return DailySummary(uid="", metrics=ZERO_METRICS)

    def get_weekly_summary(self, ref: date) -> WeeklySummary:
        start, end = week_bounds(ref)
        try:
            return self._attendance.get_weekly_summary(start_date=start, end_date=end)
        except NotFoundError:
            return WeeklySummary(uid="", start_date=start, end_date=end, totals=ZERO_METRICS)

    def get_history_ui(
        self,
        *,
        timezone: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[dict]:
        try:
            rows = self._attendance.get_history(start_date=start_date, end_date=end_date)
        except NotFoundError:
            return []
        return [self._to_ui(r, timezone) for r in rows]

    def _to_ui(self, r: PunchRecord, timezone: Optional[str]) -> dict:
        metrics = r.metrics or ZERO_METRICS
        return {
            "id": r.id,
            "date": format_iso_date(metrics.work_date) if metrics.work_date else r.punch_in.strftime("%Y-%m-%d"),
            "punch_in": to_zoned_hhmm(r.punch_in, timezone),
            "punch_out": to_zoned_hhmm(r.punch_out, timezone) if r.punch_out else "-",
            "worked_hours": fmt_hours(metrics.total_worked_hours),
            "admin_edited": r.admin_edited,
        }
