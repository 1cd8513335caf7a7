# hie_core/registrations/provisioning.py
"""
Privileged approval operation.

Everything that turns a pending registration into a working account happens
in one database transaction, so a failure at any step leaves the request
pending and no partial identity, profile or facility behind:

  1. pending -> approved (conditional update; loses to a concurrent decision)
  2. identity creation (email + temporary password)
  3. facility requests only: facility created and verified from the form data
  4. profile upsert with the role and facility binding
  5. audit entries

Callers must have checked that the approver is MoH; this module trusts them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from hie_core.audit.services import REGISTRATION_APPROVED, USER_PROVISIONED, AuditService
from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import ConflictError, NotFoundError, ProvisioningError, ValidationError
from hie_core.common.cache import QueryCache
from hie_core.facilities.models import FacilityStatus, FacilityType
from hie_core.facilities.services import FacilityService
from hie_core.iam.services import IdentityService, ProfileService, split_display_name
from hie_core.registrations.models import (
    ROLE_FOR_TYPE,
    RegistrationRequest,
    RegistrationStatus,
    RegistrationType,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProvisioningOutcome:
    request_id: int
    user_id: int
    role: str
    facility_id: Optional[int] = None


def _actor_label(approver_id: Optional[int]) -> str:
    if not approver_id:
        return "system"
    User = get_user_model()
    u = User.objects.filter(pk=approver_id).only("email", "username").first()
    if u is None:
        return str(approver_id)
    return u.email or u.username


def _facility_type(raw: Any) -> str:
    return raw if raw in FacilityType.values else FacilityType.OTHER


def _claim_pending(request_id: int, approver_id: Optional[int]) -> None:
    updated = RegistrationRequest.objects.filter(
        id=request_id,
        status=RegistrationStatus.PENDING,
    ).update(
        status=RegistrationStatus.APPROVED,
        approved_by_id=approver_id,
        processed_at=timezone.now(),
    )
    if updated:
        return
    current = RegistrationRequest.objects.filter(id=request_id).values_list("status", flat=True).first()
    if current is None:
        raise NotFoundError(f"Registration request {request_id} not found.")
    raise ConflictError(f"Registration request {request_id} is already {current}.")


def approve_request(
    request_id: int,
    request_type: str,
    request_data: Mapping[str, Any],
    email: str,
    password: str,
    name: str,
    role: str,
    approver_id: Optional[int],
) -> ProvisioningOutcome:
    if ROLE_FOR_TYPE.get(request_type) != role:
        raise ValidationError({"role": f"{role} cannot be provisioned for a {request_type} request."})

    try:
        with transaction.atomic():
            _claim_pending(request_id, approver_id)

            first_name, last_name = split_display_name(name)
            user = IdentityService.create_identity(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )

            actor = _actor_label(approver_id)
            facility_id = None
            if request_type == RegistrationType.FACILITY:
                facility = FacilityService.create_pending(
                    name=request_data.get("facilityName", ""),
                    lga=request_data.get("lga", ""),
                    facility_type=_facility_type(request_data.get("facilityType")),
                )
                facility = FacilityService.set_status(
                    facility_id=facility.id,
                    status=FacilityStatus.VERIFIED,
                    actor_label=actor,
                )
                facility_id = facility.id

            ProfileService.provision(
                user_id=user.pk,
                role=role,
                facility_id=facility_id,
                first_name=first_name,
                last_name=last_name,
            )

            RegistrationRequest.objects.filter(id=request_id).update(
                provisioned_user_id=user.pk,
                facility_id=facility_id,
            )

            AuditService.log(
                action=REGISTRATION_APPROVED,
                user=actor,
                resource=f"{request_type}:{request_id}",
                facility_id=facility_id,
            )
            AuditService.log(
                action=USER_PROVISIONED,
                user=actor,
                resource=f"{user.email} ({role})",
                facility_id=facility_id,
            )
    except DatabaseError as exc:
        logger.error("provisioning_failed", request_id=request_id, error=str(exc))
        raise ProvisioningError() from exc

    QueryCache.invalidate_on_commit(query_cache.REGISTRATIONS)
    logger.info("registration_provisioned", request_id=request_id, user_id=user.pk, role=role)
    return ProvisioningOutcome(request_id=request_id, user_id=user.pk, role=role, facility_id=facility_id)
