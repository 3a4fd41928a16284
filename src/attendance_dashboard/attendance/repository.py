from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailySummary, PunchRecord, PunchResult, PunchStatus, WeeklySummary


class AttendanceRepository(Protocol):
    """Employee-facing attendance calls of the external service."""

    def punch_in(self) -> PunchResult:
        raise NotImplementedError

    def punch_out(self) -> PunchResult:
        raise NotImplementedError

    def get_status(self) -> PunchStatus:
        raise NotImplementedError

    def get_history(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def get_daily_summary(self, work_date: Optional[date] = None) -> DailySummary:
        raise NotImplementedError

    def get_weekly_summary(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> WeeklySummary:
        raise NotImplementedError
