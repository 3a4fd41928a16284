from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import format_iso_date, today_in, week_bounds
from ..common.web import current_role, date_arg, error_response, fail, permission_required
from ..container import Container
from ..core.enums import Permission
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    def _board():
        board = container.report_board(current_role=current_role(), today=today_in(session.get("timezone")))
        board.refresh_roster()
        return board

    def _write_report_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=[
                "uid",
                "name",
                "department",
                "position",
                "shift",
                "time_in",
                "time_out",
                "regular_hours",
                "overtime_hours",
                "night_diff_hours",
                "late_minutes",
                "undertime_minutes",
                "total_worked_hours",
                "status",
                "punch_count",
            ],
            extrasaction="ignore",
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _daily_board():
        work_date = date_arg("date") or today_in(session.get("timezone"))
        board = _board()
        board.show_day(work_date)
        return board

    @app.route("/admin/reports/daily", endpoint="admin_daily_report")
    @permission_required(Permission.VIEW_REPORTS)
    def admin_daily_report():
        try:
            board = _daily_board()
        except DomainError as e:
            return error_response(e)

        report = board.daily
        return jsonify(
            {
                "date": format_iso_date(board.daily_date),
                "error": board.daily_error,
                "roster_loaded": bool(report and report.roster_loaded),
                "rows": [r.to_dict() for r in board.daily_rows(request.args.get("q", ""))],
                "totals": report.totals.to_dict() if report else None,
            }
        )

    @app.route("/admin/reports/daily.csv", endpoint="admin_daily_report_csv")
    @permission_required(Permission.VIEW_REPORTS)
    def admin_daily_report_csv():
        try:
            board = _daily_board()
        except DomainError as e:
            return error_response(e)
        if board.daily_error:
            return fail(board.daily_error, 502)
        return _write_report_csv(
            rows=board.daily_rows(request.args.get("q", "")),
            filename=f"daily_report_{format_iso_date(board.daily_date)}.csv",
        )

    @app.route("/admin/reports/weekly", endpoint="admin_weekly_report")
    @permission_required(Permission.VIEW_REPORTS)
    def admin_weekly_report():
        try:
            start, end = date_arg("start"), date_arg("end")
            if not (start and end):
                start, end = week_bounds(start or today_in(session.get("timezone")))
            if end < start:
                return fail("End date must not be before start date", 400)
            board = _board()
            board.show_week(start, end)
        except DomainError as e:
            return error_response(e)

        report = board.weekly
        return jsonify(
            {
                "start_date": format_iso_date(start),
                "end_date": format_iso_date(end),
                "error": board.weekly_error,
                "roster_loaded": bool(report and report.roster_loaded),
                "rows": [r.to_dict() for r in board.weekly_rows(request.args.get("q", ""))],
                "totals": report.totals.to_dict() if report else None,
            }
        )
