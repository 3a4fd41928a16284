from __future__ import annotations

from typing import Optional, Sequence

from ..common.concurrency import GuardRegistry
from ..common.datetime_utils import is_known_zone, parse_hhmm
from ..common.validators import optional_text
from ..core.enums import Permission, Role
from ..core.exceptions import ValidationError
from ..core.permissions import require
from ..users.model import EmployeeSummary, ShiftSchedule
from ..users.repository import UserRepository


class ScheduleService:
    """Use case: assign an employee's shift boundaries and/or timezone."""

    def __init__(self, users: UserRepository, *, guards: Optional[GuardRegistry] = None):
        self._users = users
        self._guards = guards or GuardRegistry()

    @staticmethod
    def _parse_schedule(start: str, end: str) -> Optional[ShiftSchedule]:
        start = (start or "").strip()
        end = (end or "").strip()
        if not start and not end:
            return None
        if not start or not end:
            raise ValidationError("Both shift start and shift end are required")
        s = parse_hhmm(start, "Shift start")
        e = parse_hhmm(end, "Shift end")
        return ShiftSchedule(start=s.strftime("%H:%M"), end=e.strftime("%H:%M"))

    def assign(
        self,
        *,
        current_role: Role,
        uid: str,
        start: str = "",
        end: str = "",
        timezone: str = "",
    ) -> EmployeeSummary:
        require(current_role, Permission.EDIT_SCHEDULES)

        schedule = self._parse_schedule(start, end)
        tz = optional_text(timezone)
        if tz and not is_known_zone(tz):
            raise ValidationError(f"Unknown timezone: {tz}")
        if not schedule and not tz:
            raise ValidationError("Provide at least a schedule or timezone.")

        with self._guards.get("Save schedule", uid).hold():
            return self._users.assign_schedule(uid, schedule=schedule, timezone=tz)

    @staticmethod
    def replace_in_roster(roster: Sequence[EmployeeSummary], updated: EmployeeSummary) -> list[EmployeeSummary]:
        return [updated if u.uid == updated.uid else u for u in roster]
