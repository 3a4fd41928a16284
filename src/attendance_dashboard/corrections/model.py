from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..attendance.model import DailyMetrics, PunchRecord
from ..common.datetime_utils import parse_instant, parse_optional_instant


@dataclass
class EditSession:
    """Local-time fields an admin is editing for one punch record."""

    record: PunchRecord
    timezone: Optional[str]
    punch_in: str
    punch_out: str = ""
    error: Optional[str] = None

    @property
    def punch_out_editable(self) -> bool:
        return self.record.punch_out is not None


@dataclass(frozen=True)
class PunchUpdate:
    """Answer of the service to an admin correction (metrics recomputed server side)."""

    id: str
    punch_in: datetime
    punch_out: Optional[datetime]
    metrics: Optional[DailyMetrics]
    admin_edited: bool
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PunchUpdate":
        metrics = data.get("metrics")
        return cls(
            id=str(data["id"]),
            punch_in=parse_instant(data["punchIn"]),
            punch_out=parse_optional_instant(data.get("punchOut")),
            metrics=DailyMetrics.from_dict(metrics) if metrics else None,
            admin_edited=bool(data.get("adminEdited", False)),
            message=str(data.get("message") or ""),
        )
