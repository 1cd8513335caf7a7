# hie_core/governance/services.py
from __future__ import annotations

import structlog
from django.db import transaction
from django.utils import timezone

from hie_core.audit.services import CONSENT_REVOKED, AuditService
from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import AlreadyRevokedError, NotFoundError
from hie_core.common.cache import QueryCache
from hie_core.governance.models import ConsentRecord, ConsentStatus
from hie_core.governance.selectors import consents_for
from hie_core.iam.resolver import ResolvedSession

logger = structlog.get_logger(__name__)


class ConsentService:
    @staticmethod
    @transaction.atomic
    def revoke_consent(*, session: ResolvedSession, patient_id: str, ip: str | None = None) -> ConsentRecord:
        """
        active -> revoked. Consents outside the caller's scope are reported
        as not found.
        """
        patient_id = (patient_id or "").strip()
        try:
            consent = consents_for(session).select_for_update().get(patient_id=patient_id)
        except ConsentRecord.DoesNotExist:
            raise NotFoundError(f"Consent record for {patient_id} not found.")

        if consent.status == ConsentStatus.REVOKED:
            raise AlreadyRevokedError(f"Consent for {patient_id} is already revoked.")

        actor = session.email or str(session.user_id)
        consent.status = ConsentStatus.REVOKED
        consent.revoked_at = timezone.now()
        consent.revoked_by = actor
        consent.save(update_fields=["status", "revoked_at", "revoked_by"])

        AuditService.log(
            action=CONSENT_REVOKED,
            user=actor,
            resource=f"Consent/{patient_id}",
            ip=ip,
            facility_id=consent.granted_to_id,
        )
        QueryCache.invalidate_on_commit(query_cache.CONSENTS)
        logger.info("consent_revoked", patient_id=patient_id, facility_id=consent.granted_to_id)
        return consent
