# hie_core/facilities/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from hie_core.facilities.models import Facility
from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession


def facilities_for(session: ResolvedSession) -> QuerySet[Facility]:
    """
    MoH sees every facility; a FacilityAdmin sees only its bound facility;
    anyone else gets an empty result (not an error).
    """
    if session.role == Role.MOH:
        qs = Facility.objects.all()
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = Facility.objects.filter(id=session.facility_id)
    else:
        return Facility.objects.none()
    return qs.order_by("name", "id")


def list_facilities(session: ResolvedSession, *, status: str | None = None) -> list[Facility]:
    qs = facilities_for(session)
    if status:
        qs = qs.filter(status=status)
    return list(qs)

