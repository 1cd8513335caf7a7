from __future__ import annotations

from hie_core.iam.permissions import ROLE_MOH, RolePermission


class RegistrationPermission(RolePermission):
    allowed_roles_per_action = {
        "list": {ROLE_MOH},
        "retrieve": {ROLE_MOH},
        "approve": {ROLE_MOH},
        "reject": {ROLE_MOH},
    }
