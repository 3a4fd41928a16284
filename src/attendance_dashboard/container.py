from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.tracker import PunchTracker
from .common.concurrency import GuardRegistry
from .core.enums import Role
from .corrections.http_punch_repository import HttpPunchAdminRepository
from .corrections.service import PunchEditWorkflow
from .gateway.connection import ApiConfig, ApiConnection, TokenProvider
from .reports.board import ReportBoard
from .reports.http_report_repository import HttpReportRepository
from .reports.service import ReportService
from .schedules.service import ScheduleService
from .users.http_user_repository import HttpUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: ApiConnection
    guards: GuardRegistry

    attendance_repo: HttpAttendanceRepository
    users_repo: HttpUserRepository
    reports_repo: HttpReportRepository
    punches_repo: HttpPunchAdminRepository

    attendance_service: AttendanceService
    user_service: UserService
    schedule_service: ScheduleService
    report_service: ReportService

    def punch_tracker(self, *, uid: str, timezone: Optional[str]) -> PunchTracker:
        return PunchTracker(self.attendance_repo, timezone=timezone, guard=self.guards.get("Punch", uid))

    def edit_workflow(self, *, current_role: Role) -> PunchEditWorkflow:
        return PunchEditWorkflow(self.punches_repo, current_role=current_role, guards=self.guards)

    def report_board(self, *, current_role: Role, today: date) -> ReportBoard:
        return ReportBoard(self.report_service, current_role=current_role, today=today)


def build_container(*, api_config: dict, token_provider: TokenProvider) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", 10)),
    )
    conn = ApiConnection(config, token_provider)
    guards = GuardRegistry()

    attendance_repo = HttpAttendanceRepository(conn)
    users_repo = HttpUserRepository(conn)
    reports_repo = HttpReportRepository(conn)
    punches_repo = HttpPunchAdminRepository(conn)

    return Container(
        conn=conn,
        guards=guards,
        attendance_repo=attendance_repo,
        users_repo=users_repo,
        reports_repo=reports_repo,
        punches_repo=punches_repo,
        attendance_service=AttendanceService(attendance_repo),
        user_service=UserService(users_repo, guards=guards),
        schedule_service=ScheduleService(users_repo, guards=guards),
        report_service=ReportService(reports_repo, users_repo),
    )
