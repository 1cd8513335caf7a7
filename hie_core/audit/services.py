# hie_core/audit/services.py
from __future__ import annotations

from typing import Optional

import structlog
from django.db import transaction

from hie_core.audit.models import AuditLog, AuditStatus
from hie_core.common import cache as query_cache
from hie_core.common.cache import QueryCache

logger = structlog.get_logger(__name__)

# action codes written by this backend
FACILITY_APPROVED = "FACILITY_APPROVED"
FACILITY_REJECTED = "FACILITY_REJECTED"
REGISTRATION_SUBMITTED = "REGISTRATION_SUBMITTED"
REGISTRATION_APPROVED = "REGISTRATION_APPROVED"
REGISTRATION_REJECTED = "REGISTRATION_REJECTED"
USER_PROVISIONED = "USER_PROVISIONED"
CONSENT_REVOKED = "CONSENT_REVOKED"
LOGIN = "LOGIN"
LOGIN_FAILED = "LOGIN_FAILED"


class AuditService:
    """
    Central audit writer.
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        action: str,
        user: str,
        resource: str,
        status: str = AuditStatus.SUCCESS,
        ip: Optional[str] = None,
        facility_id: Optional[int] = None,
    ) -> AuditLog:
        entry = AuditLog.objects.create(
            action=action,
            user=user or "anonymous",
            resource=resource,
            status=status,
            ip=ip or None,
            facility_id=facility_id,
        )
        QueryCache.invalidate_on_commit(query_cache.AUDIT_LOGS)
        logger.info("audit_logged", action=action, resource=resource, status=status)
        return entry


def client_ip(request) -> Optional[str]:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None
