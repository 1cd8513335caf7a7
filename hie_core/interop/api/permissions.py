from __future__ import annotations

from hie_core.iam.permissions import ROLE_FACILITY_ADMIN, ROLE_MOH, RolePermission


class InteropPermission(RolePermission):
    allowed_roles_per_action = {
        "list": {ROLE_MOH},
        "retrieve": {ROLE_MOH},
        "details": {ROLE_MOH},
    }


class DataQualityPermission(RolePermission):
    allowed_roles_per_action = {
        "list": {ROLE_MOH, ROLE_FACILITY_ADMIN},
    }
