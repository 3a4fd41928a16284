from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from attendance_dashboard.attendance.model import PunchRecord, PunchResult, PunchStatus
from attendance_dashboard.attendance.service import AttendanceService
from attendance_dashboard.common.concurrency import GuardRegistry
from attendance_dashboard.container import Container
from attendance_dashboard.core.enums import Role
from attendance_dashboard.core.exceptions import AuthenticationError, NotFoundError, ServiceError, ServiceTimeoutError
from attendance_dashboard.corrections.model import PunchUpdate
from attendance_dashboard.main import create_app
from attendance_dashboard.reports.service import ReportService
from attendance_dashboard.schedules.service import ScheduleService
from attendance_dashboard.users.model import EmployeeSummary
from attendance_dashboard.users.service import UserService

UTC = timezone.utc


class FakeUsers:
    def __init__(self):
        self.current = EmployeeSummary(uid="s1", first_name="Sue", last_name="Lim", role=Role.SUPERADMIN)
        self.roster = [
            EmployeeSummary(uid="u1", first_name="Ana", last_name="Reyes", timezone="Asia/Manila"),
            EmployeeSummary(uid="u2", first_name="Ben", last_name="Cruz"),
        ]
        self.fail_with: Exception | None = None

    def get_current(self):
        if self.fail_with:
            raise self.fail_with
        return self.current

    def list_all(self):
        if self.fail_with:
            raise self.fail_with
        return list(self.roster)

    def assign_schedule(self, uid, *, schedule=None, timezone=None):
        u = next(u for u in self.roster if u.uid == uid)
        return replace(u, schedule=schedule or u.schedule, timezone=timezone or u.timezone)

    def grant_admin(self, uid):
        self.roster = [replace(u, role=Role.ADMIN) if u.uid == uid else u for u in self.roster]
        return "granted"

    def revoke_admin(self, uid):
        self.roster = [replace(u, role=Role.EMPLOYEE) if u.uid == uid else u for u in self.roster]
        return "revoked"


class FakeAttendance:
    def __init__(self):
        self.open: PunchRecord | None = None
        self.fail_with: Exception | None = None

    def get_status(self):
        return PunchStatus(is_punched_in=self.open is not None, current_punch=self.open)

    def punch_in(self):
        if self.fail_with:
            raise self.fail_with
        instant = datetime(2024, 1, 1, 1, 0, tzinfo=UTC)
        self.open = PunchRecord(id="p1", uid="u1", punch_in=instant)
        return PunchResult(id="p1", instant=instant)

    def punch_out(self):
        self.open = None
        return PunchResult(id="p1", instant=datetime(2024, 1, 1, 10, 0, tzinfo=UTC))

    def get_history(self, *, start_date=None, end_date=None):
        raise NotFoundError("No history", status_code=404)

    def get_daily_summary(self, work_date=None):
        raise NotFoundError("No summary", status_code=404)

    def get_weekly_summary(self, *, start_date=None, end_date=None):
        raise NotFoundError("No summary", status_code=404)


class FakeReports:
    def get_daily_report(self, work_date):
        raise NotFoundError("No report", status_code=404)

    def get_weekly_report(self, *, start_date, end_date):
        raise NotFoundError("No report", status_code=404)


class FakePunches:
    def __init__(self):
        self.records = [
            PunchRecord(
                id="p1",
                uid="u1",
                punch_in=datetime(2024, 1, 1, 1, 0, tzinfo=UTC),
                punch_out=datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
            )
        ]

    def list_user_punches(self, uid, *, start_date=None, end_date=None):
        return [p for p in self.records if p.uid == uid]

    def update_punch(self, punch_id, *, punch_in=None, punch_out=None):
        old = self.records[0]
        new = replace(old, punch_in=punch_in, punch_out=punch_out or old.punch_out, admin_edited=True)
        self.records = [new]
        return PunchUpdate(id=new.id, punch_in=new.punch_in, punch_out=new.punch_out, metrics=None, admin_edited=True)


@pytest.fixture()
def fakes():
    return {"users": FakeUsers(), "attendance": FakeAttendance(), "reports": FakeReports(), "punches": FakePunches()}


@pytest.fixture()
def client(monkeypatch, fakes):
    monkeypatch.setenv("APP_ENV", "testing")
    guards = GuardRegistry()
    users = fakes["users"]
    container = Container(
        conn=None,
        guards=guards,
        attendance_repo=fakes["attendance"],
        users_repo=users,
        reports_repo=fakes["reports"],
        punches_repo=fakes["punches"],
        attendance_service=AttendanceService(fakes["attendance"]),
        user_service=UserService(users, guards=guards),
        schedule_service=ScheduleService(users, guards=guards),
        report_service=ReportService(fakes["reports"], users),
    )
    app = create_app(container=container)
    return app.test_client()


def _sign_in(client, role: Role = Role.SUPERADMIN, tz: str = "Asia/Manila"):
    with client.session_transaction() as s:
        s["token"] = "t"
        s["uid"] = "u1"
        s["role"] = role.value
        s["timezone"] = tz


def test_sign_in_stores_role(client):
    resp = client.post("/session", json={"token": "abc"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "superadmin"
    with client.session_transaction() as s:
        assert s["token"] == "abc"
        assert s["timezone"] == "UTC"


def test_sign_in_rejected_token_clears_session(client, fakes):
    fakes["users"].fail_with = AuthenticationError("Token expired")

    resp = client.post("/session", json={"token": "abc"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token expired"
    with client.session_transaction() as s:
        assert "token" not in s


def test_requires_sign_in(client):
    assert client.get("/api/punch/status").status_code == 401


def test_punch_toggle_round_trip(client):
    _sign_in(client, Role.EMPLOYEE)

    assert client.get("/api/punch/status").get_json() == {"state": "clocked-out", "log": "Not yet punched today"}

    body = client.post("/api/punch/toggle").get_json()
    assert body["state"] == "clocked-in"
    assert body["log"] == "Punched in at 09:00"

    body = client.post("/api/punch/toggle").get_json()
    assert body["state"] == "clocked-out"


def test_punch_timeout_is_retryable(client, fakes):
    _sign_in(client, Role.EMPLOYEE)
    fakes["attendance"].fail_with = ServiceTimeoutError("Punch in timed out, please retry")

    resp = client.post("/api/punch/toggle")

    assert resp.status_code == 504
    assert resp.get_json()["retryable"] is True


def test_expired_token_signs_out(client, fakes):
    _sign_in(client, Role.EMPLOYEE)
    fakes["attendance"].fail_with = AuthenticationError("Session expired")

    assert client.post("/api/punch/toggle").status_code == 401
    with client.session_transaction() as s:
        assert "token" not in s


def test_employee_summaries_are_empty_when_missing(client):
    _sign_in(client, Role.EMPLOYEE)

    daily = client.get("/api/summary/daily?date=2024-01-03").get_json()
    weekly = client.get("/api/summary/weekly?date=2024-01-03").get_json()

    assert daily["regular_hours"] == 0
    assert (weekly["start_date"], weekly["end_date"]) == ("2024-01-01", "2024-01-07")
    assert client.get("/api/history").get_json() == []
    assert client.get("/api/summary/daily?date=03/01/2024").status_code == 400


def test_daily_report_lists_roster_as_absent(client):
    _sign_in(client, Role.ADMIN)

    body = client.get("/admin/reports/daily?date=2024-01-03").get_json()

    assert body["date"] == "2024-01-03"
    assert body["roster_loaded"] is True
    assert [r["status"] for r in body["rows"]] == ["absent", "absent"]
    assert body["totals"]["absent_count"] == 2


def test_daily_report_csv(client):
    _sign_in(client, Role.ADMIN)

    resp = client.get("/admin/reports/daily.csv?date=2024-01-03&q=ben")

    assert resp.mimetype == "text/csv"
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("uid,name,")
    assert len(lines) == 2


def test_weekly_report_rejects_inverted_range(client):
    _sign_in(client, Role.ADMIN)

    assert client.get("/admin/reports/weekly?start=2024-01-07&end=2024-01-01").status_code == 400


def test_reports_forbidden_for_employee(client):
    _sign_in(client, Role.EMPLOYEE)

    assert client.get("/admin/reports/daily").status_code == 403


def test_admin_edits_punch_in_employee_zone(client, fakes):
    _sign_in(client, Role.ADMIN)

    resp = client.put("/admin/punches/u1/p1", json={"punch_in": "08:30"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["admin_edited"] is True
    assert body["punches"][0]["punch_in"] == "2024-01-01T00:30:00.000Z"


def test_invalid_edit_is_rejected(client, fakes):
    _sign_in(client, Role.ADMIN)

    resp = client.put("/admin/punches/u1/p1", json={"punch_in": "8.30"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Punch-in must be a valid time (HH:MM)"


def test_toggle_admin_requires_superadmin(client):
    _sign_in(client, Role.ADMIN)
    assert client.post("/admin/users/u2/role").status_code == 403

    _sign_in(client, Role.SUPERADMIN)
    body = client.post("/admin/users/u2/role").get_json()
    assert {u["uid"]: u["role"] for u in body["users"]}["u2"] == "admin"


def test_assign_schedule(client):
    _sign_in(client, Role.ADMIN)

    resp = client.put("/admin/users/u2/schedule", json={"start": "09:00", "end": "18:00"})

    assert resp.get_json()["user"]["shift"] == "09:00–18:00"
    assert client.put("/admin/users/u2/schedule", json={}).status_code == 400


def test_sign_in_requires_token(client):
    resp = client.post("/session", json={"token": "  "})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Token is required"


@pytest.mark.parametrize(
    "url",
    [
        "/admin/reports/daily?date=2024-13-01",
        "/admin/reports/weekly?start=yesterday",
        "/admin/punches/u1?start=01/01/2024",
    ],
)
def test_bad_query_date_is_rejected(client, url):
    _sign_in(client, Role.ADMIN)

    resp = client.get(url)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid date (YYYY-MM-DD)"


def test_unreadable_service_answer_is_not_a_date_error(client, fakes):
    _sign_in(client, Role.EMPLOYEE)
    fakes["attendance"].fail_with = ServiceError("Punch-in returned an unreadable response", status_code=200)

    resp = client.post("/api/punch/toggle")

    assert resp.status_code == 502
    assert resp.get_json()["message"] == "Punch-in returned an unreadable response"


def test_assign_schedule_replaces_roster_entry(client):
    _sign_in(client, Role.ADMIN)

    body = client.put("/admin/users/u1/schedule", json={"timezone": "Asia/Tokyo"}).get_json()

    assert [u["uid"] for u in body["users"]] == ["u1", "u2"]
    assert body["users"][0]["timezone"] == "Asia/Tokyo"
    assert body["users"][1]["timezone"] == "UTC"


def test_clock_reads_latest_tick_in_employee_zone(client):
    _sign_in(client, Role.EMPLOYEE)
    client.application.extensions["display_clock"].latest = datetime(2024, 1, 1, 16, 0, 5, tzinfo=UTC)

    body = client.get("/api/clock").get_json()

    assert body == {"now": "2024-01-01T16:00:05.000Z", "local_date": "2024-01-02", "local_time": "00:00:05"}
