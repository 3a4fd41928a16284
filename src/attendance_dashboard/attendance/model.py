from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_instant, parse_iso_date, parse_optional_instant


def _float(data: Mapping[str, Any], key: str) -> float:
    return float(data.get(key) or 0)


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


@dataclass(frozen=True)
class DailyMetrics:
    """Computed summary of worked time, produced by the metrics service.

    Never recomputed here: only displayed and summed.
    """

    work_date: Optional[date] = None
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    night_diff_hours: float = 0.0
    late_minutes: int = 0
    undertime_minutes: int = 0
    total_worked_hours: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailyMetrics":
        wd = data.get("workDate")
        return cls(
            work_date=parse_iso_date(wd) if wd else None,
            regular_hours=_float(data, "regularHours"),
            overtime_hours=_float(data, "overtimeHours"),
            night_diff_hours=_float(data, "nightDiffHours"),
            late_minutes=_int(data, "lateMinutes"),
            undertime_minutes=_int(data, "undertimeMinutes"),
            total_worked_hours=_float(data, "totalWorkedHours"),
        )

    def __add__(self, other: "DailyMetrics") -> "DailyMetrics":
        return DailyMetrics(
            work_date=self.work_date if self.work_date == other.work_date else None,
            regular_hours=self.regular_hours + other.regular_hours,
            overtime_hours=self.overtime_hours + other.overtime_hours,
            night_diff_hours=self.night_diff_hours + other.night_diff_hours,
            late_minutes=self.late_minutes + other.late_minutes,
            undertime_minutes=self.undertime_minutes + other.undertime_minutes,
            total_worked_hours=self.total_worked_hours + other.total_worked_hours,
        )


ZERO_METRICS = DailyMetrics()


@dataclass(frozen=True)
class PunchRecord:
    """Domain entity: one punch-in with its (optional) punch-out."""

    id: str
    uid: str
    punch_in: datetime
    punch_out: Optional[datetime] = None
    admin_edited: bool = False
    metrics: Optional[DailyMetrics] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.punch_out is None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, uid: str = "") -> "PunchRecord":
        metrics = data.get("metrics")
        return cls(
            id=str(data.get("id") or data.get("attendanceId") or ""),
            uid=str(data.get("uid") or uid),
            punch_in=parse_instant(data["punchIn"]),
            punch_out=parse_optional_instant(data.get("punchOut")),
            admin_edited=bool(data.get("adminEdited", False)),
            metrics=DailyMetrics.from_dict(metrics) if metrics else None,
            created_at=parse_optional_instant(data.get("createdAt")),
        )


@dataclass(frozen=True)
class PunchStatus:
    is_punched_in: bool
    current_punch: Optional[PunchRecord] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PunchStatus":
        current = data.get("currentPunch")
        return cls(
            is_punched_in=bool(data.get("isPunchedIn", False)),
            current_punch=PunchRecord.from_dict(current) if current else None,
        )


@dataclass(frozen=True)
class PunchResult:
    """Answer to a punch-in or punch-out action."""

    id: str
    instant: datetime
    message: str = ""
    metrics: Optional[DailyMetrics] = None


@dataclass(frozen=True)
class DailySummary:
    uid: str
    metrics: DailyMetrics
    punches: tuple[PunchRecord, ...] = ()
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailySummary":
        uid = str(data.get("uid") or "")
        return cls(
            uid=uid,
            metrics=DailyMetrics.from_dict(data),
            punches=tuple(PunchRecord.from_dict(p, uid=uid) for p in data.get("punches") or []),
            updated_at=parse_optional_instant(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class WeeklySummary:
    uid: str
    start_date: date
    end_date: date
    totals: DailyMetrics
    days: tuple[DailySummary, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeeklySummary":
        return cls(
            uid=str(data.get("uid") or ""),
            start_date=parse_iso_date(data["startDate"]),
            end_date=parse_iso_date(data["endDate"]),
            totals=DailyMetrics.from_dict(data.get("totals") or {}),
            days=tuple(DailySummary.from_dict(d) for d in data.get("days") or []),
        )
