# hie_core/registrations/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession
from hie_core.registrations.models import RegistrationRequest, RegistrationStatus


def registrations_for(session: ResolvedSession) -> QuerySet[RegistrationRequest]:
    """Registration requests are an MoH-only queue; everyone else sees nothing."""
    if session.role != Role.MOH:
        return RegistrationRequest.objects.none()
    return RegistrationRequest.objects.all().order_by("-submitted_at", "-id")


def pending_requests_for(session: ResolvedSession) -> QuerySet[RegistrationRequest]:
    return registrations_for(session).filter(status=RegistrationStatus.PENDING)
