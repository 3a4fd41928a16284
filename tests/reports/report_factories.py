from __future__ import annotations

from datetime import date, datetime, timezone

from attendance_dashboard.attendance.model import DailyMetrics, PunchRecord
from attendance_dashboard.reports.model import DailyReportEntry, EmployeeInfo
from attendance_dashboard.users.model import EmployeeSummary, ShiftSchedule

UTC = timezone.utc


def make_punch(uid: str, hin: int, hout: int | None = None) -> PunchRecord:
    return PunchRecord(
        id=f"p-{uid}-{hin}",
        uid=uid,
        punch_in=datetime(2024, 1, 1, hin, 0, tzinfo=UTC),
        punch_out=datetime(2024, 1, 1, hout, 0, tzinfo=UTC) if hout is not None else None,
    )


def make_entry(uid: str, punches, *, regular: float = 0.0, late: int = 0, first: str = "") -> DailyReportEntry:
    return DailyReportEntry(
        uid=uid,
        metrics=DailyMetrics(work_date=date(2024, 1, 1), regular_hours=regular, late_minutes=late),
        punches=tuple(punches),
        employee=EmployeeInfo(first_name=first),
    )


def make_roster() -> list[EmployeeSummary]:
    return [
        EmployeeSummary(
            uid="A",
            first_name="Ana",
            last_name="Reyes",
            department="Ops",
            timezone="Asia/Manila",
            schedule=ShiftSchedule("09:00", "18:00"),
        ),
        EmployeeSummary(uid="B", first_name="Ben", last_name="Cruz", department="Finance"),
    ]
