# hie_core/facilities/services.py
from __future__ import annotations

from typing import Optional

import structlog
from django.db import transaction

from hie_core.audit.services import FACILITY_APPROVED, FACILITY_REJECTED, AuditService
from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import ConflictError, NotFoundError, ValidationError
from hie_core.common.cache import QueryCache
from hie_core.facilities.models import (
    REJECTED_ADMINISTRATORS,
    REJECTED_COMPLIANCE,
    VERIFIED_ADMINISTRATORS,
    VERIFIED_COMPLIANCE,
    Facility,
    FacilityStatus,
    FacilityType,
)

logger = structlog.get_logger(__name__)

DECIDED_STATUSES = {FacilityStatus.VERIFIED, FacilityStatus.REJECTED}


class FacilityService:
    @staticmethod
    @transaction.atomic
    def create_pending(
        *,
        name: str,
        lga: str,
        facility_type: str = FacilityType.PUBLIC,
    ) -> Facility:
        name = (name or "").strip()
        lga = (lga or "").strip()
        if not name:
            raise ValidationError({"name": "This field is required."})
        if not lga:
            raise ValidationError({"lga": "This field is required."})
        if facility_type not in FacilityType.values:
            raise ValidationError({"facility_type": "Invalid facility_type."})

        f = Facility.objects.create(
            name=name,
            lga=lga,
            facility_type=facility_type,
            status=FacilityStatus.PENDING,
            compliance=0,
            administrators=0,
        )
        QueryCache.invalidate_on_commit(query_cache.FACILITIES)
        return f

    @staticmethod
    @transaction.atomic
    def set_status(*, facility_id: int, status: str, actor_label: Optional[str] = None) -> Facility:
        """
        pending -> verified | rejected, applying the fixed defaults:
          verified: compliance=70, administrators=1
          rejected: compliance=0,  administrators=0
        """
        if status not in DECIDED_STATUSES:
            raise ValidationError({"status": "Status must be 'verified' or 'rejected'."})

        try:
            f = Facility.objects.select_for_update().get(id=facility_id)
        except Facility.DoesNotExist:
            raise NotFoundError(f"Facility {facility_id} not found.")

        if f.status != FacilityStatus.PENDING:
            raise ConflictError(f"Facility {f.name} is already {f.status}.")

        f.status = status
        if status == FacilityStatus.VERIFIED:
            f.compliance = VERIFIED_COMPLIANCE
            f.administrators = VERIFIED_ADMINISTRATORS
        else:
            f.compliance = REJECTED_COMPLIANCE
            f.administrators = REJECTED_ADMINISTRATORS
        f.save(update_fields=["status", "compliance", "administrators", "updated_at"])

        AuditService.log(
            action=FACILITY_APPROVED if status == FacilityStatus.VERIFIED else FACILITY_REJECTED,
            user=actor_label or "system",
            resource=f.name,
            facility_id=f.id,
        )
        QueryCache.invalidate_on_commit(query_cache.FACILITIES)
        logger.info("facility_status_set", facility_id=f.id, status=status)
        return f
