from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.validators import require_non_empty
from ..common.web import current_role, error_response, fail, login_required, permission_required
from ..container import Container
from ..core.enums import Permission
from ..core.exceptions import DomainError
from .model import EmployeeSummary
from .service import search_roster


def employee_to_dict(u: EmployeeSummary) -> dict:
    return {
        "uid": u.uid,
        "first_name": u.first_name,
        "last_name": u.last_name,
        "email": u.email,
        "department": u.department,
        "position": u.position,
        "timezone": u.timezone,
        "role": u.role.value,
        "schedule": u.schedule.to_dict() if u.schedule else None,
        "shift": u.shift_label,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/session", methods=["POST"], endpoint="sign_in")
    def sign_in():
        """Attach a bearer token issued by the identity provider to this session."""

        data = request.get_json(silent=True) or {}
        try:
            token = require_non_empty(data.get("token") or "", "Token")
        except DomainError as e:
            return error_response(e)

        session.clear()
        session["token"] = token
        try:
            me = container.user_service.current_user()
        except DomainError as e:
            session.clear()
            return error_response(e)

        session["uid"] = me.uid
        session["name"] = me.full_name
        session["role"] = me.role.value
        session["timezone"] = me.timezone
        return jsonify({"success": True, "user": employee_to_dict(me)})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        try:
            u = container.user_service.current_user()
        except DomainError as e:
            return error_response(e)
        return jsonify(employee_to_dict(u))

    @app.route("/admin/users", endpoint="admin_users")
    @permission_required(Permission.VIEW_REPORTS)
    def admin_users():
        try:
            roster = container.user_service.list_roster()
        except DomainError as e:
            return error_response(e)
        users = search_roster(roster, request.args.get("q", ""))
        return jsonify([employee_to_dict(u) for u in users])

    @app.route("/admin/users/<uid>/role", methods=["POST"], endpoint="toggle_admin")
    @permission_required(Permission.MANAGE_ROLES)
    def toggle_admin(uid: str):
        try:
            roster = container.user_service.list_roster()
            target = next((u for u in roster if u.uid == uid), None)
            if target is None:
                return fail("Employee not found", 404)
            roster = container.user_service.toggle_admin(current_role=current_role(), target=target)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "users": [employee_to_dict(u) for u in roster]})

    @app.route("/admin/users/<uid>/schedule", methods=["PUT"], endpoint="assign_schedule")
    @permission_required(Permission.EDIT_SCHEDULES)
    def assign_schedule(uid: str):
        data = request.get_json(silent=True) or {}
        try:
            roster = container.user_service.list_roster()
            updated = container.schedule_service.assign(
                current_role=current_role(),
                uid=uid,
                start=data.get("start") or "",
                end=data.get("end") or "",
                timezone=data.get("timezone") or "",
            )
        except DomainError as e:
            return error_response(e)
        roster = container.schedule_service.replace_in_roster(roster, updated)
        return jsonify(
            {
                "success": True,
                "user": employee_to_dict(updated),
                "users": [employee_to_dict(u) for u in roster],
            }
        )
