from __future__ import annotations

import json as jsonlib
from datetime import date

import pytest
import requests

from attendance_dashboard.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ServiceError,
    ServiceTimeoutError,
)
from attendance_dashboard.gateway.connection import ApiConfig, ApiConnection
from attendance_dashboard.gateway.http_base import call_api
from attendance_dashboard.reports.http_report_repository import HttpReportRepository
from attendance_dashboard.users.http_user_repository import HttpUserRepository
from attendance_dashboard.users.model import ShiftSchedule


def _response(status: int, body=None, *, text: str | None = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if text is not None:
        resp._content = text.encode("utf-8")
    elif body is not None:
        resp._content = jsonlib.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    return resp


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response


def _conn(session: FakeSession, token: str | None = "tok") -> ApiConnection:
    return ApiConnection(ApiConfig(base_url="http://svc.test/"), lambda: token, session=session)


def test_sends_bearer_token_and_drops_empty_params():
    session = FakeSession(_response(200, {"ok": True}))

    data = call_api(
        _conn(session),
        "GET",
        "/api/attendance/history",
        operation="Fetch history",
        params={"startDate": "2024-01-01", "endDate": None},
    )

    assert data == {"ok": True}
    call = session.calls[0]
    assert call["url"] == "http://svc.test/api/attendance/history"
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["params"] == {"startDate": "2024-01-01"}
    assert call["timeout"] == 10.0


def test_missing_token_never_calls_service():
    session = FakeSession(_response(200, {}))

    with pytest.raises(AuthenticationError):
        call_api(_conn(session, token=None), "GET", "/api/user/details", operation="Fetch user details")

    assert session.calls == []


@pytest.mark.parametrize(
    "status, exc",
    [
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (409, ServiceError),
        (500, ServiceError),
    ],
)
def test_status_codes_map_to_errors(status, exc):
    session = FakeSession(_response(status, {"message": "Nope"}))

    with pytest.raises(exc) as err:
        call_api(_conn(session), "POST", "/api/attendance/punch-in", operation="Punch in")

    assert str(err.value) == "Nope"


def test_error_message_falls_back_to_body_then_operation():
    with pytest.raises(ServiceError) as err:
        call_api(_conn(FakeSession(_response(502, text="Bad gateway"))), "GET", "/x", operation="Fetch x")
    assert str(err.value) == "Bad gateway"
    assert err.value.status_code == 502

    with pytest.raises(ServiceError) as err:
        call_api(_conn(FakeSession(_response(500))), "GET", "/x", operation="Fetch x")
    assert str(err.value) == "Fetch x failed (500)"


def test_timeout_is_retryable():
    session = FakeSession(error=requests.Timeout("slow"))

    with pytest.raises(ServiceTimeoutError) as err:
        call_api(_conn(session), "GET", "/api/attendance/status", operation="Fetch punch status")

    assert err.value.retryable
    assert str(err.value) == "Fetch punch status timed out, please retry"


def test_connection_error_is_service_error():
    session = FakeSession(error=requests.ConnectionError("refused"))

    with pytest.raises(ServiceError):
        call_api(_conn(session), "GET", "/api/attendance/status", operation="Fetch punch status")


def test_daily_report_reads_data_list():
    body = {
        "data": [
            {
                "uid": "A",
                "regularHours": 8,
                "employee": {"firstName": "Ana", "lastName": "Reyes"},
                "punches": [{"id": "p1", "punchIn": "2024-01-01T01:00:00.000Z", "punchOut": "2024-01-01T10:00:00Z"}],
            }
        ]
    }
    session = FakeSession(_response(200, body))

    feed = HttpReportRepository(_conn(session)).get_daily_report(date(2024, 1, 1))

    assert session.calls[0]["params"] == {"date": "2024-01-01"}
    assert feed[0].uid == "A"
    assert feed[0].metrics.regular_hours == 8.0
    assert feed[0].punches[0].uid == "A"
    assert feed[0].employee.first_name == "Ana"


def test_assign_schedule_sends_only_given_fields():
    employee = {"uid": "u1", "firstName": "Ana", "lastName": "Reyes", "timezone": "Asia/Manila"}
    session = FakeSession(_response(200, employee))

    updated = HttpUserRepository(_conn(session)).assign_schedule("u1", schedule=ShiftSchedule("09:00", "18:00"))

    call = session.calls[0]
    assert (call["method"], call["url"]) == ("PUT", "http://svc.test/api/admin/schedule/u1")
    assert call["json"] == {"schedule": {"start": "09:00", "end": "18:00"}}
    assert updated.timezone == "Asia/Manila"


def test_unreadable_success_body_is_service_error():
    session = FakeSession(_response(200, text="<html>maintenance</html>"))

    with pytest.raises(ServiceError) as err:
        call_api(_conn(session), "GET", "/api/user/all", operation="Fetch users")

    assert str(err.value) == "Fetch users returned an unreadable response"
    assert err.value.status_code == 200
