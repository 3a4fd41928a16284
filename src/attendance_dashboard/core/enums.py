from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission checks."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.EMPLOYEE


class PunchState(str, Enum):
    """Two-state punch lifecycle of one employee."""

    IN = "clocked-in"
    OUT = "clocked-out"


class RowStatus(str, Enum):
    """Presentation status of a report row."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    ABSENT = "absent"


class Permission(str, Enum):
    VIEW_REPORTS = "view_reports"
    EDIT_PUNCHES = "edit_punches"
    EDIT_SCHEDULES = "edit_schedules"
    MANAGE_ROLES = "manage_roles"
