from __future__ import annotations

from flask import Flask, current_app, jsonify, session

from ..common.datetime_utils import format_instant, format_iso_date, now_utc, resolve_zone, today_in
from ..common.web import date_arg, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError
from .model import DailyMetrics, DailySummary


def metrics_to_dict(m: DailyMetrics) -> dict:
    return {
        "work_date": format_iso_date(m.work_date) if m.work_date else None,
        "regular_hours": m.regular_hours,
        "overtime_hours": m.overtime_hours,
        "night_diff_hours": m.night_diff_hours,
        "late_minutes": m.late_minutes,
        "undertime_minutes": m.undertime_minutes,
        "total_worked_hours": m.total_worked_hours,
    }


def _summary_to_dict(s: DailySummary) -> dict:
    out = metrics_to_dict(s.metrics)
    out["punch_count"] = len(s.punches)
    return out


def register(app: Flask, container: Container) -> None:
    def _tracker():
        return container.punch_tracker(uid=session.get("uid", ""), timezone=session.get("timezone"))

    @app.route("/api/clock", endpoint="clock")
    @login_required
    def clock():
        ticker = current_app.extensions.get("display_clock")
        now = (ticker.latest if ticker else None) or now_utc()
        local = now.astimezone(resolve_zone(session.get("timezone")))
        return jsonify(
            {
                "now": format_instant(now),
                "local_date": format_iso_date(local.date()),
                "local_time": local.strftime("%H:%M:%S"),
            }
        )

    @app.route("/api/punch/status", endpoint="punch_status")
    @login_required
    def punch_status():
        tracker = _tracker()
        try:
            tracker.load(today=today_in(session.get("timezone")))
        except DomainError as e:
            return error_response(e)
        return jsonify({"state": tracker.state.value, "log": tracker.log})

    @app.route("/api/punch/toggle", methods=["POST"], endpoint="punch_toggle")
    @login_required
    def punch_toggle():
        tracker = _tracker()
        try:
            tracker.load(today=today_in(session.get("timezone")))
            tracker.toggle()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "state": tracker.state.value, "log": tracker.log})

    @app.route("/api/summary/daily", endpoint="daily_summary")
    @login_required
    def daily_summary():
        try:
            work_date = date_arg("date") or today_in(session.get("timezone"))
            summary = container.attendance_service.get_daily_summary(work_date)
        except DomainError as e:
            return error_response(e)
        return jsonify(_summary_to_dict(summary))

    @app.route("/api/summary/weekly", endpoint="weekly_summary")
    @login_required
    def weekly_summary():
        try:
            ref = date_arg("date") or today_in(session.get("timezone"))
            summary = container.attendance_service.get_weekly_summary(ref)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "start_date": format_iso_date(summary.start_date),
                "end_date": format_iso_date(summary.end_date),
                "totals": metrics_to_dict(summary.totals),
                "days": [_summary_to_dict(d) for d in summary.days],
            }
        )

    @app.route("/api/history", endpoint="history")
    @login_required
    def history():
        try:
            rows = container.attendance_service.get_history_ui(
                timezone=session.get("timezone"),
                start_date=date_arg("start"),
                end_date=date_arg("end"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(rows)
