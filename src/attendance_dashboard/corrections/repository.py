from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..attendance.model import PunchRecord
from .model import PunchUpdate


class PunchAdminRepository(Protocol):
    def list_user_punches(
        self,
        uid: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def update_punch(
        self,
        punch_id: str,
        *,
        punch_in: Optional[datetime] = None,
        punch_out: Optional[datetime] = None,
    ) -> PunchUpdate:
        """Admin-only override; the service recomputes metrics and flags the record."""

        raise NotImplementedError
