from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..attendance.model import PunchRecord
from ..attendance.timestamps import rebuild_instant
from ..common.concurrency import GuardRegistry, LatestRequest
from ..common.datetime_utils import parse_hhmm, to_zoned_hhmm
from ..core.enums import Permission, Role
from ..core.exceptions import AuthenticationError, DomainError, NotFoundError, ValidationError
from ..core.permissions import require
from .model import EditSession, PunchUpdate
from .repository import PunchAdminRepository

logger = logging.getLogger(__name__)


class PunchEditWorkflow:
    """Admin punch log for one selected employee, and corrections to it.

    A successful save closes the edit session and refetches the employee's
    punch list in full so metrics shown are the ones recomputed by the
    service. A failed save keeps the session open with ``error`` set and
    changes nothing else.
    """

    def __init__(
        self,
        punches: PunchAdminRepository,
        *,
        current_role: Role,
        guards: Optional[GuardRegistry] = None,
    ):
        self._punches = punches
        self._role = current_role
        self._guards = guards or GuardRegistry()
        self._list: LatestRequest[list[PunchRecord]] = LatestRequest([])
        self._range: tuple[Optional[date], Optional[date]] = (None, None)
        self.session: Optional[EditSession] = None
        self.list_error: Optional[str] = None

    @property
    def selected_uid(self) -> Optional[str]:
        return self._list.param

    @property
    def punches(self) -> list[PunchRecord]:
        return self._list.value

    def select_employee(
        self,
        uid: Optional[str],
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[PunchRecord]:
        """Load ``uid``'s punches; a later selection supersedes an earlier one."""

        require(self._role, Permission.VIEW_REPORTS)
        self._range = (start_date, end_date)
        token = self._list.begin(uid)
        if not uid:
            self._list.publish(token, [])
            self.list_error = None
            return []

        try:
            rows = list(self._punches.list_user_punches(uid, start_date=start_date, end_date=end_date))
        except NotFoundError:
            rows = []
        except AuthenticationError:
            raise
        except DomainError as e:
            if self._list.publish(token, []):
                self.list_error = str(e)
            return []

        if self._list.publish(token, rows):
            self.list_error = None
        return self._list.value

    def open(self, record: PunchRecord, timezone: Optional[str]) -> EditSession:
        require(self._role, Permission.EDIT_PUNCHES)
        self.session = EditSession(
            record=record,
            timezone=timezone,
            punch_in=to_zoned_hhmm(record.punch_in, timezone),
            punch_out=to_zoned_hhmm(record.punch_out, timezone) if record.punch_out else "",
        )
        return self.session

    def cancel(self) -> None:
        self.session = None

    @staticmethod
    def build_payload(session: EditSession) -> tuple[datetime, Optional[datetime]]:
        """Rebuild the edited instants, anchored to the instants they replace.

        Raises ValidationError for anything that must not reach the service.
        """

        record = session.record
        parse_hhmm(session.punch_in, "Punch-in")
        new_in = rebuild_instant(record.punch_in, session.punch_in, session.timezone)

        new_out = None
        if session.punch_out.strip() and record.punch_out is not None:
            parse_hhmm(session.punch_out, "Punch-out")
            new_out = rebuild_instant(record.punch_out, session.punch_out, session.timezone)

        effective_out = new_out or record.punch_out
        if effective_out is not None and effective_out <= new_in:
            raise ValidationError("Punch-out must be after punch-in")
        return new_in, new_out

    def save(self, session: Optional[EditSession] = None) -> PunchUpdate:
        session = session or self.session
        if session is None:
            raise ValidationError("No punch is being edited")
        require(self._role, Permission.EDIT_PUNCHES)

        with self._guards.get("Save edit", session.record.id).hold():
            session.error = None
            try:
                new_in, new_out = self.build_payload(session)
                result = self._punches.update_punch(session.record.id, punch_in=new_in, punch_out=new_out)
            except DomainError as e:
                session.error = str(e)
                logger.warning("punch %s update failed: %s", session.record.id, e)
                raise

        if self.session is session:
            self.session = None
        logger.info("punch %s updated (admin_edited=%s)", result.id, result.admin_edited)

        if self.selected_uid in (None, session.record.uid):
            start, end = self._range
            self.select_employee(session.record.uid, start_date=start, end_date=end)
        return result
