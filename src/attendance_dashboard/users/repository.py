from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeSummary, ShiftSchedule


class UserRepository(Protocol):
    """Roster and role calls of the external service.

    Services depend on this interface, not on the HTTP implementation.
    """

    def list_all(self) -> Sequence[EmployeeSummary]:
        raise NotImplementedError

    def get_current(self) -> EmployeeSummary:
        raise NotImplementedError

    def assign_schedule(
        self,
        uid: str,
        *,
        schedule: Optional[ShiftSchedule] = None,
        timezone: Optional[str] = None,
    ) -> EmployeeSummary:
        raise NotImplementedError

    def grant_admin(self, uid: str) -> str:
        raise NotImplementedError

    def revoke_admin(self, uid: str) -> str:
        raise NotImplementedError
