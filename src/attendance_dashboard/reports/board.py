from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.concurrency import LatestRequest
from ..common.datetime_utils import shift_day, shift_week, week_bounds
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError
from ..users.model import EmployeeSummary
from .model import DailyReport, DailyReportRow, WeeklyReport, WeeklyReportRow
from .service import ReportService
from .synthesizer import filter_rows


class ReportBoard:
    """Daily and weekly report views of one admin session.

    Each view keeps its own snapshot and refetches when its date or week
    changes. Loads are keyed by the period that triggered them; a result
    arriving for a period that is no longer selected is dropped.
    Errors are kept per view (``daily_error`` / ``weekly_error``).
    """

    def __init__(self, service: ReportService, *, current_role: Role, today: date):
        self._service = service
        self._role = current_role
        self._daily: LatestRequest[Optional[DailyReport]] = LatestRequest(None)
        self._weekly: LatestRequest[Optional[WeeklyReport]] = LatestRequest(None)
        self.roster: Optional[list[EmployeeSummary]] = None
        self.daily_date = today
        self.week = week_bounds(today)
        self.daily_error: Optional[str] = None
        self.weekly_error: Optional[str] = None

    @property
    def daily(self) -> Optional[DailyReport]:
        return self._daily.value

    @property
    def weekly(self) -> Optional[WeeklyReport]:
        return self._weekly.value

    def refresh_roster(self) -> Optional[list[EmployeeSummary]]:
        self.roster = self._service.load_roster()
        return self.roster

    def show_day(self, work_date: date) -> Optional[DailyReport]:
        self.daily_date = work_date
        token = self._daily.begin(work_date)
        try:
            report = self._service.build_daily_report(
                current_role=self._role, work_date=work_date, roster=self.roster
            )
        except AuthenticationError:
            raise
        except DomainError as e:
            if self._daily.publish(token, None):
                self.daily_error = str(e)
            return None

        if not self._daily.publish(token, report):
            return None
        self.daily_error = None
        return report

    def step_day(self, direction: int) -> Optional[DailyReport]:
        return self.show_day(shift_day(self.daily_date, direction))

    def show_week(self, start: date, end: date) -> Optional[WeeklyReport]:
        self.week = (start, end)
        token = self._weekly.begin((start, end))
        try:
            report = self._service.build_weekly_report(
                current_role=self._role, start_date=start, end_date=end, roster=self.roster
            )
        except AuthenticationError:
            raise
        except DomainError as e:
            if self._weekly.publish(token, None):
                self.weekly_error = str(e)
            return None

        if not self._weekly.publish(token, report):
            return None
        self.weekly_error = None
        return report

    def step_week(self, direction: int) -> Optional[WeeklyReport]:
        return self.show_week(*shift_week(self.week[0], direction))

    def daily_rows(self, query: str = "") -> list[DailyReportRow]:
        return filter_rows(self.daily.rows, query) if self.daily else []

    def weekly_rows(self, query: str = "") -> list[WeeklyReportRow]:
        return filter_rows(self.weekly.rows, query) if self.weekly else []
