from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date, parse_instant
from ..gateway.connection import ApiConnection
from ..gateway.http_base import call_api
from .model import DailyMetrics, DailySummary, PunchRecord, PunchResult, PunchStatus, WeeklySummary
from .repository import AttendanceRepository


def _date_param(value: Optional[date]) -> Optional[str]:
    return format_iso_date(value) if value else None


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def punch_in(self) -> PunchResult:
        data = call_api(self._conn, "POST", "/api/attendance/punch-in", operation="Punch-in")
        return PunchResult(
            id=str(data["id"]),
            instant=parse_instant(data["punchIn"]),
            message=data.get("message") or "",
        )

    def punch_out(self) -> PunchResult:
        data = call_api(self._conn, "POST", "/api/attendance/punch-out", operation="Punch-out")
        metrics = data.get("metrics")
        return PunchResult(
            id=str(data["id"]),
            instant=parse_instant(data["punchOut"]),
            message=data.get("message") or "",
            metrics=DailyMetrics.from_dict(metrics) if metrics else None,
        )

    def get_status(self) -> PunchStatus:
        data = call_api(self._conn, "GET", "/api/attendance/status", operation="Fetch punch status")
        return PunchStatus.from_dict(data or {})

    def get_history(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[PunchRecord]:
        rows = call_api(
            self._conn,
            "GET",
            "/api/attendance/history",
            operation="Fetch history",
            params={"startDate": _date_param(start_date), "endDate": _date_param(end_date)},
        )
        return [PunchRecord.from_dict(r) for r in rows or []]

    def get_daily_summary(self, work_date: Optional[date] = None) -> DailySummary:
        data = call_api(
            self._conn,
            "GET",
            "/api/attendance/summary/daily",
            operation="Fetch daily summary",
            params={"date": _date_param(work_date)},
        )
        return DailySummary.from_dict(data)

    def get_weekly_summary(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> WeeklySummary:
        data = call_api(
            self._conn,
            "GET",
            "/api/attendance/summary/weekly",
            operation="Fetch weekly summary",
            params={"startDate": _date_param(start_date), "endDate": _date_param(end_date)},
        )
        return WeeklySummary.from_dict(data)
