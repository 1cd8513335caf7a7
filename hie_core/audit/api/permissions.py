from __future__ import annotations

from hie_core.iam.permissions import ALL_ROLES, RolePermission


class AuditLogPermission(RolePermission):
    """Every role reads audit logs; selectors narrow what each one sees."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
    }
