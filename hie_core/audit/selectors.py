# hie_core/audit/selectors.py
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.db.models import Q, QuerySet

from hie_core.audit.models import AuditLog
from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession

API_KEY_USER_PREFIX = "api_key_"


def page_size() -> int:
    return int(settings.HIE_CONSOLE.get("AUDIT_LOG_PAGE_SIZE", 100))


def audit_logs_for(session: ResolvedSession) -> QuerySet[AuditLog]:
    """
    Role scoping:
      - MoH: everything
      - FacilityAdmin: entries bound to its facility
      - Developer: integration traffic (API-key actors, API key actions)
      - anyone else: nothing
    """
    qs = AuditLog.objects.all()

    if session.role == Role.MOH:
        pass
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = qs.filter(facility_id=session.facility_id)
    elif session.role == Role.DEVELOPER:
        qs = qs.filter(Q(user__startswith=API_KEY_USER_PREFIX) | Q(action__contains="API_KEY"))
    else:
        return AuditLog.objects.none()

    return qs.order_by("-timestamp", "-id")


def list_audit_logs(session: ResolvedSession, *, action: Optional[str] = None) -> list[AuditLog]:
    qs = audit_logs_for(session)
    if action:
        qs = qs.filter(action=action)
    return list(qs[: page_size()])
