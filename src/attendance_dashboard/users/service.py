from __future__ import annotations

from typing import Optional, Sequence

from ..common.concurrency import GuardRegistry
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..core.permissions import can_toggle_admin
from .model import EmployeeSummary
from .repository import UserRepository


def index_by_uid(roster: Sequence[EmployeeSummary]) -> dict[str, EmployeeSummary]:
    return {u.uid: u for u in roster}


def search_roster(roster: Sequence[EmployeeSummary], query: str) -> list[EmployeeSummary]:
    q = (query or "").strip().lower()
    if not q:
        return list(roster)
    return [
        u
        for u in roster
        if q in u.first_name.lower() or q in u.last_name.lower() or q in u.email.lower()
    ]


class UserService:
    """Use case: roster lookup and admin role management."""

    def __init__(self, users: UserRepository, *, guards: Optional[GuardRegistry] = None):
        self._users = users
        self._guards = guards or GuardRegistry()

    def current_user(self) -> EmployeeSummary:
        return self._users.get_current()

    def list_roster(self) -> list[EmployeeSummary]:
        return list(self._users.list_all())

    def is_toggling(self, uid: str) -> bool:
        return self._guards.is_busy("Role update", uid)

    def toggle_admin(self, *, current_role: Role, target: EmployeeSummary) -> list[EmployeeSummary]:
        """Revoke admin from an admin, grant it to anyone else; returns the refreshed roster."""

        if not can_toggle_admin(current_role, target.role):
            raise AuthorizationError("Only a superadmin can change admin roles")

        with self._guards.get("Role update", target.uid).hold():
            if target.role == Role.ADMIN:
                self._users.revoke_admin(target.uid)
            else:
                self._users.grant_admin(target.uid)
            return self.list_roster()
