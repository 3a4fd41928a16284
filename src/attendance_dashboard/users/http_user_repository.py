from __future__ import annotations

from typing import Optional, Sequence

from ..gateway.connection import ApiConnection
from ..gateway.http_base import call_api
from .model import EmployeeSummary, ShiftSchedule
from .repository import UserRepository


class HttpUserRepository(UserRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_all(self) -> Sequence[EmployeeSummary]:
        rows = call_api(self._conn, "GET", "/api/user/all", operation="Fetch users")
        return [EmployeeSummary.from_dict(r) for r in rows or []]

    def get_current(self) -> EmployeeSummary:
        data = call_api(self._conn, "GET", "/api/user/details", operation="Fetch user details")
        return EmployeeSummary.from_dict(data)

    def assign_schedule(
        self,
        uid: str,
        *,
        schedule: Optional[ShiftSchedule] = None,
        timezone: Optional[str] = None,
    ) -> EmployeeSummary:
        payload: dict = {}
        if schedule:
            payload["schedule"] = schedule.to_dict()
        if timezone:
            payload["timezone"] = timezone
        data = call_api(
            self._conn,
            "PUT",
            f"/api/admin/schedule/{uid}",
            operation="Assign schedule",
            json=payload,
        )
        return EmployeeSummary.from_dict(data)

    def grant_admin(self, uid: str) -> str:
        data = call_api(self._conn, "POST", "/api/user/grant-admin", operation="Grant admin", json={"uid": uid})
        return str((data or {}).get("message") or "")

    def revoke_admin(self, uid: str) -> str:
        data = call_api(self._conn, "POST", "/api/user/revoke-admin", operation="Revoke admin", json={"uid": uid})
        return str((data or {}).get("message") or "")
