from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.enums import Permission, Role
from ..core.exceptions import AuthenticationError, DomainError, NotFoundError
from ..core.permissions import require
from ..users.model import EmployeeSummary
from ..users.repository import UserRepository
from .model import DailyReport, WeeklyReport
from .repository import ReportRepository
from .synthesizer import synthesize_daily_rows, synthesize_weekly_rows
from .totals import compute_totals

logger = logging.getLogger(__name__)


class ReportService:
    """Use case: build the admin daily/weekly reports (rows + totals)."""

    def __init__(self, reports: ReportRepository, users: UserRepository):
        self._reports = reports
        self._users = users

    def load_roster(self) -> Optional[list[EmployeeSummary]]:
        """Roster for absentee detection; ``None`` when it could not be fetched."""
        try:
            return list(self._users.list_all())
        except AuthenticationError:
            raise
        except DomainError as e:
            logger.warning("roster unavailable, absentees will not be listed: %s", e)
            return None

    def build_daily_report(
        self,
        *,
        current_role: Role,
        work_date: date,
        roster: Optional[Sequence[EmployeeSummary]] = None,
    ) -> DailyReport:
        require(current_role, Permission.VIEW_REPORTS)

        try:
            feed = self._reports.get_daily_report(work_date)
        except NotFoundError:
            feed = []

        if roster is None:
            roster = self.load_roster()
        rows = synthesize_daily_rows(feed, roster or [])
        return DailyReport(
            work_date=work_date,
            rows=rows,
            totals=compute_totals(rows),
            roster_loaded=roster is not None,
        )

    def build_weekly_report(
        self,
        *,
        current_role: Role,
        start_date: date,
        end_date: date,
        roster: Optional[Sequence[EmployeeSummary]] = None,
    ) -> WeeklyReport:
        require(current_role, Permission.VIEW_REPORTS)

        try:
            feed = self._reports.get_weekly_report(start_date=start_date, end_date=end_date)
        except NotFoundError:
            feed = []

        if roster is None:
            roster = self.load_roster()
        rows = synthesize_weekly_rows(feed, roster or [])
        return WeeklyReport(
            start_date=start_date,
            end_date=end_date,
            rows=rows,
            totals=compute_totals(rows),
            roster_loaded=roster is not None,
        )
