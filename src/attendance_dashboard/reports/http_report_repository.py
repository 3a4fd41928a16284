from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_iso_date
from ..gateway.connection import ApiConnection
from ..gateway.http_base import call_api
from .model import DailyReportEntry, WeeklyReportEntry
from .repository import ReportRepository


class HttpReportRepository(ReportRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def get_daily_report(self, work_date: date) -> Sequence[DailyReportEntry]:
        data = call_api(
            self._conn,
            "GET",
            "/api/admin/reports/daily",
            operation="Fetch daily report",
            params={"date": format_iso_date(work_date)},
        )
        return [DailyReportEntry.from_dict(r) for r in (data or {}).get("data") or []]

    def get_weekly_report(self, *, start_date: date, end_date: date) -> Sequence[WeeklyReportEntry]:
        data = call_api(
            self._conn,
            "GET",
            "/api/admin/reports/weekly",
            operation="Fetch weekly report",
            params={"startDate": format_iso_date(start_date), "endDate": format_iso_date(end_date)},
        )
        return [WeeklyReportEntry.from_dict(r) for r in (data or {}).get("data") or []]
