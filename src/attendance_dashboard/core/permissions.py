"""Role -> permission table.

Every role check in the package goes through ``has_permission``/``require``
instead of comparing role strings.
"""
from __future__ import annotations

from .enums import Permission, Role
from .exceptions import AuthorizationError

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.EMPLOYEE: frozenset(),
    Role.ADMIN: frozenset(
        {
            Permission.VIEW_REPORTS,
            Permission.EDIT_PUNCHES,
            Permission.EDIT_SCHEDULES,
        }
    ),
    Role.SUPERADMIN: frozenset(
        {
            Permission.VIEW_REPORTS,
            Permission.EDIT_PUNCHES,
            Permission.EDIT_SCHEDULES,
            Permission.MANAGE_ROLES,
        }
    ),
}


def has_permission(role: Role, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def require(role: Role, permission: Permission) -> None:
    if not has_permission(role, permission):
        raise AuthorizationError("You do not have permission to perform this action")


def can_toggle_admin(actor: Role, target: Role) -> bool:
    """Superadmins may grant/revoke admin, but never on another superadmin."""

    return has_permission(actor, Permission.MANAGE_ROLES) and target != Role.SUPERADMIN
