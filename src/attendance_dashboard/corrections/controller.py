from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.model import PunchRecord
from ..common.datetime_utils import format_instant
from ..common.formatting import fmt_hours
from ..common.web import current_role, date_arg, error_response, fail, permission_required
from ..container import Container
from ..core.enums import Permission
from ..core.exceptions import DomainError


def punch_to_dict(p: PunchRecord) -> dict:
    return {
        "id": p.id,
        "uid": p.uid,
        "punch_in": format_instant(p.punch_in),
        "punch_out": format_instant(p.punch_out) if p.punch_out else None,
        "admin_edited": p.admin_edited,
        "worked_hours": fmt_hours(p.metrics.total_worked_hours) if p.metrics else None,
    }


def register(app: Flask, container: Container) -> None:
    def _employee_timezone(uid: str):
        roster = container.user_service.list_roster()
        return next((u.timezone for u in roster if u.uid == uid), None)

    @app.route("/admin/punches/<uid>", endpoint="admin_user_punches")
    @permission_required(Permission.VIEW_REPORTS)
    def admin_user_punches(uid: str):
        try:
            workflow = container.edit_workflow(current_role=current_role())
            punches = workflow.select_employee(uid, start_date=date_arg("start"), end_date=date_arg("end"))
        except DomainError as e:
            return error_response(e)
        if workflow.list_error:
            return fail(workflow.list_error, 502)
        return jsonify([punch_to_dict(p) for p in punches])

    @app.route("/admin/punches/<uid>/<punch_id>", methods=["PUT"], endpoint="admin_update_punch")
    @permission_required(Permission.EDIT_PUNCHES)
    def admin_update_punch(uid: str, punch_id: str):
        data = request.get_json(silent=True) or {}
        try:
            workflow = container.edit_workflow(current_role=current_role())
            punches = workflow.select_employee(uid)
            record = next((p for p in punches if p.id == punch_id), None)
            if record is None:
                return fail("Punch record not found", 404)

            edit = workflow.open(record, _employee_timezone(uid))
            edit.punch_in = data.get("punch_in") or edit.punch_in
            if "punch_out" in data:
                edit.punch_out = data.get("punch_out") or ""
            result = workflow.save(edit)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "message": result.message,
                "admin_edited": result.admin_edited,
                "punches": [punch_to_dict(p) for p in workflow.punches],
            }
        )
