"""Flask helpers shared by the feature controllers."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Permission, Role
from ..core.exceptions import (
    ActionInProgressError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ServiceError,
    ServiceTimeoutError,
    ValidationError,
)
from ..core.permissions import has_permission
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_role() -> Role:
    return Role.parse(session.get("role"))


def fail(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "token" not in session:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def permission_required(permission: Permission):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "token" not in session:
                return fail("Please sign in to continue", 401)
            if not has_permission(current_role(), permission):
                return fail("You do not have permission to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def error_response(e: DomainError):
    """Map a domain error to a JSON response; authentication errors sign the user out."""

    if isinstance(e, AuthenticationError):
        session.clear()
        return fail(str(e), 401)
    if isinstance(e, AuthorizationError):
        return fail(str(e), 403)
    if isinstance(e, ValidationError):
        return fail(str(e), 400)
    if isinstance(e, ActionInProgressError):
        return fail(str(e), 409)
    if isinstance(e, ServiceTimeoutError):
        return fail(str(e), 504, retryable=True)
    if isinstance(e, NotFoundError):
        return fail(str(e), 404)
    if isinstance(e, ServiceError):
        status = e.status_code if e.status_code and 400 <= e.status_code < 500 else 502
        return fail(str(e), status)
    logger.error("unhandled domain error: %s", e)
    return fail(str(e), 500)


def date_arg(name: str) -> Optional[date]:
    """Query-string date (YYYY-MM-DD); ``None`` when absent."""

    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")
