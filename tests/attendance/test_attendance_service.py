from __future__ import annotations

from datetime import date, datetime, timezone

from attendance_dashboard.attendance.model import DailyMetrics, DailySummary, PunchRecord, WeeklySummary
from attendance_dashboard.attendance.service import AttendanceService
from attendance_dashboard.core.exceptions import NotFoundError

UTC = timezone.utc


class FakeAttendanceRepo:
    def __init__(self, *, history=None, missing: bool = False):
        self._history = history or []
        self._missing = missing
        self.last_args = None

    def get_history(self, *, start_date=None, end_date=None):
        if self._missing:
            raise NotFoundError("No punches found", status_code=404)
        return self._history

    def get_daily_summary(self, work_date=None):
        if self._missing:
            raise NotFoundError("No summary", status_code=404)
        return DailySummary(uid="u1", metrics=DailyMetrics(work_date=work_date, regular_hours=8))

    def get_weekly_summary(self, *, start_date=None, end_date=None):
        self.last_args = {"start_date": start_date, "end_date": end_date}
        if self._missing:
            raise NotFoundError("No summary", status_code=404)
        return WeeklySummary(uid="u1", start_date=start_date, end_date=end_date, totals=DailyMetrics(regular_hours=40))


def test_missing_daily_summary_is_empty():
    svc = AttendanceService(FakeAttendanceRepo(missing=True))
    summary = svc.get_daily_summary(date(2024, 1, 3))

    assert summary.metrics.regular_hours == 0
    assert summary.punches == ()


def test_weekly_summary_requests_monday_to_sunday():
    repo = FakeAttendanceRepo()
    svc = AttendanceService(repo)

    summary = svc.get_weekly_summary(date(2024, 1, 3))

    assert repo.last_args == {"start_date": date(2024, 1, 1), "end_date": date(2024, 1, 7)}
    assert summary.totals.regular_hours == 40


def test_missing_weekly_summary_keeps_requested_week():
    svc = AttendanceService(FakeAttendanceRepo(missing=True))
    summary = svc.get_weekly_summary(date(2024, 1, 7))

    assert (summary.start_date, summary.end_date) == (date(2024, 1, 1), date(2024, 1, 7))
    assert summary.totals.regular_hours == 0


def test_history_rows_render_local_times():
    record = PunchRecord(
        id="p1",
        uid="u1",
        punch_in=datetime(2024, 1, 1, 1, 0, tzinfo=UTC),
        punch_out=datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
        admin_edited=True,
        metrics=DailyMetrics(work_date=date(2024, 1, 1), total_worked_hours=8.0),
    )
    rows = AttendanceService(FakeAttendanceRepo(history=[record])).get_history_ui(timezone="Asia/Manila")

    assert rows == [
        {
            "id": "p1",
            "date": "2024-01-01",
            "punch_in": "09:00",
            "punch_out": "18:00",
            "worked_hours": "8.00h",
            "admin_edited": True,
        }
    ]


def test_history_not_found_is_empty():
    assert AttendanceService(FakeAttendanceRepo(missing=True)).get_history_ui() == []
