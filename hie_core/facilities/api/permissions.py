from __future__ import annotations

from hie_core.iam.permissions import ROLE_FACILITY_ADMIN, ROLE_MOH, RolePermission


class FacilityPermission(RolePermission):
    """
    Registry reads: MoH (all) and FacilityAdmin (own facility, via selectors).
    Status decisions: MoH only.
    """
    allowed_roles_per_action = {
        "list": {ROLE_MOH, ROLE_FACILITY_ADMIN},
        "retrieve": {ROLE_MOH, ROLE_FACILITY_ADMIN},
        "set_status": {ROLE_MOH},
    }
