from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import DailyReportEntry, WeeklyReportEntry


class ReportRepository(Protocol):
    """Admin-scoped report feeds: one entry per employee who punched in the period."""

    def get_daily_report(self, work_date: date) -> Sequence[DailyReportEntry]:
        raise NotImplementedError

    def get_weekly_report(self, *, start_date: date, end_date: date) -> Sequence[WeeklyReportEntry]:
        raise NotImplementedError
