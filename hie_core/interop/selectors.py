# hie_core/interop/selectors.py
from __future__ import annotations

from dataclasses import dataclass, field

from django.conf import settings
from django.db.models import QuerySet

from hie_core.iam.models import Role
from hie_core.iam.resolver import ResolvedSession
from hie_core.interop.models import COMPLETENESS_RESOURCES, FhirEvent, QualityScore

EVENT_FEED_SIZE = 100


def completeness_threshold() -> int:
    return int(settings.HIE_CONSOLE.get("MIN_COMPLETENESS_THRESHOLD", 80))


def fhir_events_for(session: ResolvedSession) -> QuerySet[FhirEvent]:
    qs = FhirEvent.objects.select_related("facility")
    if session.role == Role.MOH:
        pass
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = qs.filter(facility_id=session.facility_id)
    else:
        return FhirEvent.objects.none()
    return qs.order_by("-timestamp", "-id")


def list_fhir_events(session: ResolvedSession, *, status: str | None = None) -> list[FhirEvent]:
    qs = fhir_events_for(session)
    if status:
        qs = qs.filter(status=status)
    return list(qs[:EVENT_FEED_SIZE])


def quality_scores_for(session: ResolvedSession) -> QuerySet[QualityScore]:
    qs = QualityScore.objects.select_related("facility")
    if session.role == Role.MOH:
        pass
    elif session.role == Role.FACILITY_ADMIN and session.facility_id:
        qs = qs.filter(facility_id=session.facility_id)
    else:
        return QualityScore.objects.none()
    return qs.order_by("-score", "facility__name")


@dataclass(frozen=True)
class QualityRow:
    facility_id: int
    facility: str
    score: int
    trend: str
    change: str
    completeness: dict
    below_threshold: bool
    incomplete_resources: list = field(default_factory=list)


def quality_row(qs_row: QualityScore, *, threshold: int) -> QualityRow:
    completeness = {r: int((qs_row.completeness or {}).get(r, 0)) for r in COMPLETENESS_RESOURCES}
    incomplete = [r for r, pct in completeness.items() if pct < threshold]
    return QualityRow(
        facility_id=qs_row.facility_id,
        facility=qs_row.facility.name,
        score=qs_row.score,
        trend=qs_row.trend,
        change=qs_row.change,
        completeness=completeness,
        below_threshold=qs_row.score < threshold,
        incomplete_resources=incomplete,
    )


def list_quality_scores(session: ResolvedSession) -> list[QualityRow]:
    threshold = completeness_threshold()
    return [quality_row(row, threshold=threshold) for row in quality_scores_for(session)]
