from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.concurrency import InFlightGuard
from ..common.datetime_utils import resolve_zone, to_zoned_hhmm
from ..core.constants import NOT_PUNCHED_MESSAGE
from ..core.enums import PunchState
from ..core.exceptions import DomainError
from .model import PunchRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def derive_punch_state(record: Optional[PunchRecord]) -> PunchState:
    """IN when the latest record is still open, OUT otherwise (or when there is none)."""
    if record is not None and record.punch_out is None:
        return PunchState.IN
    return PunchState.OUT


def describe_punch(record: Optional[PunchRecord], tz_name: Optional[str] = None, *, today: Optional[date] = None) -> str:
    """Human log line for the latest punch, times shown in the employee's zone.

    A closed punch from a day other than ``today`` counts as no punch yet.
    """
    if record is None:
        return NOT_PUNCHED_MESSAGE
    if record.punch_out is None:
        return f"Punched in at {to_zoned_hhmm(record.punch_in, tz_name)}"
    if today is not None and record.punch_out.astimezone(resolve_zone(tz_name)).date() != today:
        return NOT_PUNCHED_MESSAGE
    return f"Punched out at {to_zoned_hhmm(record.punch_out, tz_name)}"


class PunchTracker:
    """Punch in/out toggle for the signed-in employee.

    State only changes after the service confirms the action; a failed
    action leaves state and log as they were and keeps the service message
    in ``error``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        timezone: Optional[str] = None,
        guard: Optional[InFlightGuard] = None,
    ):
        self._attendance = attendance
        self._timezone = timezone
        self._guard = guard or InFlightGuard("Punch")
        self._record: Optional[PunchRecord] = None
        self._state = PunchState.OUT
        self._log = NOT_PUNCHED_MESSAGE
        self.error: Optional[str] = None

    @property
    def state(self) -> PunchState:
        return self._state

    @property
    def log(self) -> str:
        return self._log

    @property
    def record(self) -> Optional[PunchRecord]:
        return self._record

    @property
    def busy(self) -> bool:
        return self._guard.busy

    def load(self, *, today: Optional[date] = None) -> PunchState:
        status = self._attendance.get_status()
        self._apply(status.current_punch, today=today)
        return self._state

    def toggle(self) -> PunchState:
        with self._guard.hold():
            self.error = None
            try:
                if self._state == PunchState.IN:
                    record = self._punch_out()
                else:
                    record = self._punch_in()
            except DomainError as e:
                self.error = str(e)
                logger.warning("punch toggle failed: %s", e)
                raise
            self._apply(record)
            return self._state

    def _punch_in(self) -> PunchRecord:
        result = self._attendance.punch_in()
        return PunchRecord(id=result.id, uid="", punch_in=result.instant)

    def _punch_out(self) -> PunchRecord:
        result = self._attendance.punch_out()
        current = self._record
        return PunchRecord(
            id=result.id,
            uid=current.uid if current else "",
            punch_in=current.punch_in if current else result.instant,
            punch_out=result.instant,
            admin_edited=current.admin_edited if current else False,
            metrics=result.metrics,
        )

    def _apply(self, record: Optional[PunchRecord], *, today: Optional[date] = None) -> None:
        self._record = record
        self._state = derive_punch_state(record)
        self._log = describe_punch(record, self._timezone, today=today)
