from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_optional_instant
from ..common.formatting import fmt_shift
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import Role


@dataclass(frozen=True)
class ShiftSchedule:
    """Wall-clock shift boundaries (HH:MM), relative to the employee's zone."""

    start: str
    end: str

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["ShiftSchedule"]:
        if not data or not data.get("start") or not data.get("end"):
            return None
        return cls(start=str(data["start"]), end=str(data["end"]))

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class EmployeeSummary:
    """Domain entity: one employee of the roster."""

    uid: str
    first_name: str
    last_name: str
    email: str = ""
    department: str = ""
    position: str = ""
    timezone: str = DEFAULT_TIMEZONE
    role: Role = Role.EMPLOYEE
    schedule: Optional[ShiftSchedule] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def shift_label(self) -> str:
        if not self.schedule:
            return fmt_shift(None, None)
        return fmt_shift(self.schedule.start, self.schedule.end)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmployeeSummary":
        return cls(
            uid=str(data["uid"]),
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or ""),
            email=str(data.get("email") or ""),
            department=str(data.get("department") or ""),
            position=str(data.get("position") or ""),
            timezone=str(data.get("timezone") or DEFAULT_TIMEZONE),
            role=Role.parse(data.get("role")),
            schedule=ShiftSchedule.from_dict(data.get("schedule")),
            updated_at=parse_optional_instant(data.get("updatedAt")),
        )
