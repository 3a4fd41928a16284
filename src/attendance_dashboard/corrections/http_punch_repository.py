from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import PunchRecord
from ..common.datetime_utils import format_instant, format_iso_date
from ..gateway.connection import ApiConnection
from ..gateway.http_base import call_api
from .model import PunchUpdate
from .repository import PunchAdminRepository


class HttpPunchAdminRepository(PunchAdminRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_user_punches(
        self,
        uid: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[PunchRecord]:
        rows = call_api(
            self._conn,
            "GET",
            f"/api/admin/punches/{uid}",
            operation="Fetch punches",
            params={
                "startDate": format_iso_date(start_date) if start_date else None,
                "endDate": format_iso_date(end_date) if end_date else None,
            },
        )
        return [PunchRecord.from_dict(r, uid=uid) for r in rows or []]

    def update_punch(
        self,
        punch_id: str,
        *,
        punch_in: Optional[datetime] = None,
        punch_out: Optional[datetime] = None,
    ) -> PunchUpdate:
        payload: dict = {}
        if punch_in is not None:
            payload["punchIn"] = format_instant(punch_in)
        if punch_out is not None:
            payload["punchOut"] = format_instant(punch_out)
        data = call_api(
            self._conn,
            "PUT",
            f"/api/admin/punches/{punch_id}",
            operation="Update punch",
            json=payload,
        )
        return PunchUpdate.from_dict(data)
