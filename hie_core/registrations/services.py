# hie_core/registrations/services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from hie_core.audit.services import REGISTRATION_REJECTED, REGISTRATION_SUBMITTED, AuditService
from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    SubmissionError,
    ValidationError,
)
from hie_core.common.cache import QueryCache
from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession
from hie_core.iam.services import normalize_email
from hie_core.registrations.forms import REGISTRATION_FORMS
from hie_core.registrations.models import (
    ROLE_FOR_TYPE,
    RegistrationRequest,
    RegistrationStatus,
)
from hie_core.registrations.passwords import generate_temporary_password, temporary_password_length
from hie_core.registrations.provisioning import ProvisioningOutcome, approve_request
from hie_core.registrations.selectors import pending_requests_for

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ApprovalResult:
    """
    Returned once, to the approving MoH user. The temporary password is
    relayed to the applicant by hand; it is not stored or logged anywhere.
    """
    request_id: int
    user_id: int
    email: str
    role: str
    temporary_password: str
    facility_id: Optional[int] = None


def _require_moh(actor: Optional[ResolvedSession], what: str) -> None:
    if actor is None or actor.role != Role.MOH:
        raise AuthorizationError(f"Only Ministry of Health users can {what}.")


def _get_request(request_id: int) -> RegistrationRequest:
    try:
        return RegistrationRequest.objects.get(id=request_id)
    except (RegistrationRequest.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Registration request {request_id} not found.")


class RegistrationIntakeService:
    @staticmethod
    def submit_registration(*, type: str, form_data: Mapping[str, Any]) -> RegistrationRequest:
        form_class = REGISTRATION_FORMS.get(type)
        if form_class is None:
            raise ValidationError({"type": f"Unknown registration type: {type!r}."})

        form = form_class(data=dict(form_data or {}))
        form.is_valid(raise_exception=True)

        try:
            with transaction.atomic():
                req = RegistrationRequest.objects.create(
                    type=type,
                    data=dict(form.validated_data),
                    status=RegistrationStatus.PENDING,
                )
                AuditService.log(
                    action=REGISTRATION_SUBMITTED,
                    user=req.contact_email,
                    resource=f"{type}:{req.id}",
                )
        except DatabaseError as exc:
            logger.error("registration_submit_failed", type=type, error=str(exc))
            raise SubmissionError() from exc

        QueryCache.invalidate_on_commit(query_cache.REGISTRATIONS)
        logger.info("registration_submitted", request_id=req.id, type=type)
        return req


class RegistrationApprovalService:
    @staticmethod
    def list_pending_requests(*, actor: ResolvedSession) -> list[RegistrationRequest]:
        _require_moh(actor, "review registration requests")
        return list(pending_requests_for(actor))

    @staticmethod
    @transaction.atomic
    def reject(*, actor: ResolvedSession, request_id: int) -> RegistrationRequest:
        _require_moh(actor, "reject registration requests")

        updated = RegistrationRequest.objects.filter(
            id=request_id,
            status=RegistrationStatus.PENDING,
        ).update(
            status=RegistrationStatus.REJECTED,
            approved_by_id=actor.user_id,
            processed_at=timezone.now(),
        )
        req = _get_request(request_id)
        if not updated:
            raise ConflictError(f"Registration request {request_id} is already {req.status}.")

        AuditService.log(
            action=REGISTRATION_REJECTED,
            user=actor.email or str(actor.user_id),
            resource=f"{req.type}:{req.id}",
        )
        QueryCache.invalidate_on_commit(query_cache.REGISTRATIONS)
        logger.info("registration_rejected", request_id=req.id, actor_id=actor.user_id)
        return req

    @staticmethod
    def approve(
        *,
        actor: ResolvedSession,
        request_id: int,
        email: Optional[str] = None,
        temporary_password: Optional[str] = None,
        display_name: Optional[str] = None,
        target_role: Optional[str] = None,
        provisioner: Optional[Callable[..., ProvisioningOutcome]] = None,
    ) -> ApprovalResult:
        """
        Approve a pending request and provision its account.

        email / display_name / target_role default to the values implied by
        the submitted form. A temporary_password is generated unless the caller
        supplies one of exactly TEMP_PASSWORD_LENGTH characters. The
        provisioner is invoked exactly once, and only for an MoH actor.
        """
        _require_moh(actor, "approve registration requests")

        req = _get_request(request_id)
        if req.status != RegistrationStatus.PENDING:
            raise ConflictError(f"Registration request {request_id} is already {req.status}.")

        expected_role = ROLE_FOR_TYPE[req.type]
        role = target_role or expected_role
        if role != expected_role:
            raise ValidationError(
                {"role": f"A {req.type} request provisions {expected_role}, not {role}."}
            )

        email = normalize_email(email or req.contact_email)
        if not email:
            raise ValidationError({"email": "This field is required."})
        name = display_name or req.contact_name

        if temporary_password is not None and len(temporary_password) != temporary_password_length():
            raise ValidationError(
                {"temporary_password": f"Must be exactly {temporary_password_length()} characters."}
            )
        password = temporary_password or generate_temporary_password()
        provision = provisioner or approve_request
        outcome = provision(
            req.id,
            req.type,
            dict(req.data or {}),
            email,
            password,
            name,
            role,
            actor.user_id,
        )

        logger.info("registration_approved", request_id=req.id, actor_id=actor.user_id, role=role)
        return ApprovalResult(
            request_id=req.id,
            user_id=outcome.user_id,
            email=email,
            role=role,
            temporary_password=password,
            facility_id=outcome.facility_id,
        )
