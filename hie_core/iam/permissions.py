# hie_core/iam/permissions.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission

from hie_core.iam.guard import RouteRule, evaluate, validate_allowed_roles
from hie_core.iam.models import Role
from hie_core.iam.resolver import request_session

ROLE_MOH = Role.MOH
ROLE_FACILITY_ADMIN = Role.FACILITY_ADMIN
ROLE_DEVELOPER = Role.DEVELOPER

ALL_ROLES = frozenset({ROLE_MOH, ROLE_FACILITY_ADMIN, ROLE_DEVELOPER})

# Marker for "any authenticated user, role or not" in allowed_roles_per_action.
ANY_AUTHENTICATED = None


class RolePermission(BasePermission):
    """
    Role-based access for API endpoints, decided by the same guard as routes.

    Key behavior:
    - Requires authentication.
    - Uses allowed_roles_per_action; ANY_AUTHENTICATED (None) admits any
      signed-in user, including role-pending accounts.
    - If the action is unknown and the request is SAFE, fall back to
      list/retrieve; otherwise deny.
    - Empty allow-lists are rejected when the subclass is defined.
    """
    message = "Your role is not allowed to perform this action."

    allowed_roles_per_action: dict = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for action, roles in cls.allowed_roles_per_action.items():
            validate_allowed_roles(roles, where=f"{cls.__name__}.{action}")

    def _infer_action(self, request, view) -> Optional[str]:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        action = self._infer_action(request, view)
        if action in self.allowed_roles_per_action:
            allowed = self.allowed_roles_per_action[action]
        elif request.method in SAFE_METHODS and "list" in self.allowed_roles_per_action:
            allowed = self.allowed_roles_per_action["list"]
        else:
            # Unknown action => deny by default
            return False

        rule = RouteRule(path=request.path, allowed_roles=allowed)
        return evaluate(request_session(request), rule).allowed
