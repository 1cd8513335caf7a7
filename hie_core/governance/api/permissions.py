from __future__ import annotations

from hie_core.iam.permissions import ROLE_FACILITY_ADMIN, ROLE_MOH, RolePermission


class GovernancePermission(RolePermission):
    """Consent & identity screens: MoH and FacilityAdmin."""
    allowed_roles_per_action = {
        "list": {ROLE_MOH, ROLE_FACILITY_ADMIN},
        "retrieve": {ROLE_MOH, ROLE_FACILITY_ADMIN},
        "revoke": {ROLE_MOH, ROLE_FACILITY_ADMIN},
    }
