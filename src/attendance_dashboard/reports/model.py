from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..attendance.model import DailyMetrics, PunchRecord
from ..core.enums import RowStatus


@dataclass(frozen=True)
class EmployeeInfo:
    first_name: str = ""
    last_name: str = ""
    department: str = ""
    position: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "EmployeeInfo":
        data = data or {}
        return cls(
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or ""),
            department=str(data.get("department") or ""),
            position=str(data.get("position") or ""),
        )


@dataclass(frozen=True)
class DailyReportEntry:
    """One employee's day as sent by the report service (only employees who punched)."""

    uid: str
    metrics: DailyMetrics
    punches: tuple[PunchRecord, ...] = ()
    employee: EmployeeInfo = field(default_factory=EmployeeInfo)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailyReportEntry":
        uid = str(data["uid"])
        return cls(
            uid=uid,
            metrics=DailyMetrics.from_dict(data),
            punches=tuple(PunchRecord.from_dict(p, uid=uid) for p in data.get("punches") or []),
            employee=EmployeeInfo.from_dict(data.get("employee")),
        )


@dataclass(frozen=True)
class WeeklyReportEntry:
    uid: str
    totals: DailyMetrics
    days: tuple[DailyReportEntry, ...] = ()
    employee: EmployeeInfo = field(default_factory=EmployeeInfo)

    @property
    def punches(self) -> tuple[PunchRecord, ...]:
        return tuple(p for d in self.days for p in d.punches)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeeklyReportEntry":
        return cls(
            uid=str(data["uid"]),
            totals=DailyMetrics.from_dict(data.get("totals") or {}),
            days=tuple(DailyReportEntry.from_dict(d) for d in data.get("days") or []),
            employee=EmployeeInfo.from_dict(data.get("employee")),
        )


@dataclass(frozen=True)
class ReportRow:
    """Read-model: one display row per employee per period."""

    uid: str
    name: str
    department: str
    position: str
    shift: str
    time_in: Optional[str]
    time_out: Optional[str]
    metrics: DailyMetrics
    status: RowStatus
    punch_count: int = 0

    @property
    def regular_hours(self) -> float:
        return self.metrics.regular_hours

    def to_dict(self) -> dict:
        m = self.metrics
        return {
            "uid": self.uid,
            "name": self.name,
            "department": self.department,
            "position": self.position,
            "shift": self.shift,
            "time_in": self.time_in,
            "time_out": self.time_out,
            "regular_hours": m.regular_hours,
            "overtime_hours": m.overtime_hours,
            "night_diff_hours": m.night_diff_hours,
            "late_minutes": m.late_minutes,
            "undertime_minutes": m.undertime_minutes,
            "total_worked_hours": m.total_worked_hours,
            "status": self.status.value,
            "punch_count": self.punch_count,
        }


@dataclass(frozen=True)
class DailyReportRow(ReportRow):
    pass


@dataclass(frozen=True)
class WeeklyReportRow(ReportRow):
    days_worked: int = 0

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["days_worked"] = self.days_worked
        return out


@dataclass(frozen=True)
class ReportTotals:
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    night_diff_hours: float = 0.0
    late_count: int = 0
    absent_count: int = 0
    present_count: int = 0
    employee_count: int = 0
    late_minutes: int = 0
    undertime_minutes: int = 0
    average_regular_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "regular_hours": round(self.regular_hours, 2),
            "overtime_hours": round(self.overtime_hours, 2),
            "night_diff_hours": round(self.night_diff_hours, 2),
            "late_count": self.late_count,
            "absent_count": self.absent_count,
            "present_count": self.present_count,
            "employee_count": self.employee_count,
            "late_minutes": self.late_minutes,
            "undertime_minutes": self.undertime_minutes,
            "average_regular_hours": round(self.average_regular_hours, 2),
        }


@dataclass(frozen=True)
class DailyReport:
    work_date: date
    rows: list[DailyReportRow]
    totals: ReportTotals
    roster_loaded: bool = True


@dataclass(frozen=True)
class WeeklyReport:
    start_date: date
    end_date: date
    rows: list[WeeklyReportRow]
    totals: ReportTotals
    roster_loaded: bool = True

