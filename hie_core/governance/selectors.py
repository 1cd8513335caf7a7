# hie_core/governance/selectors.py
from __future__ import annotations

from django.conf import settings
from django.db.models import QuerySet

from hie_core.governance.models import ConsentRecord, MpiRecord
from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession


def mpi_page_size() -> int:
    return int(settings.HIE_CONSOLE.get("MPI_PAGE_SIZE", 50))


def consents_for(session: ResolvedSession) -> QuerySet[ConsentRecord]:
    """
    MoH: every consent. FacilityAdmin: consents granted to its facility.
    Anyone else: nothing.
    """
    qs = ConsentRecord.objects.select_related("granted_to")
    if session.role == Role.MOH:
        pass
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = qs.filter(granted_to_id=session.facility_id)
    else:
        return ConsentRecord.objects.none()
    return qs.order_by("patient_id")


def list_consent_records(session: ResolvedSession, *, status: str | None = None) -> list[ConsentRecord]:
    qs = consents_for(session)
    if status:
        qs = qs.filter(status=status)
    return list(qs)


def mpi_records_for(session: ResolvedSession) -> QuerySet[MpiRecord]:
    qs = MpiRecord.objects.select_related("facility")
    if session.role == Role.MOH:
        pass
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = qs.filter(facility_id=session.facility_id)
    else:
        return MpiRecord.objects.none()
    return qs.order_by("-created_at", "-id")


def list_mpi_records(session: ResolvedSession) -> list[MpiRecord]:
    return list(mpi_records_for(session)[: mpi_page_size()])
