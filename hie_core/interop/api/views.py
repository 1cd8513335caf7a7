# hie_core/interop/api/views.py
from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import NotFoundError
from hie_core.common.cache import QueryCache
from hie_core.iam.resolver import request_session
from hie_core.interop.api.permissions import DataQualityPermission, InteropPermission
from hie_core.interop.api.serializers import (
    FhirEventSerializer,
    MessageDetailsSerializer,
    QualityScoreSerializer,
)
from hie_core.interop.messages import message_details
from hie_core.interop.models import FhirEvent, QualityScore
from hie_core.interop.selectors import fhir_events_for, list_fhir_events, list_quality_scores


class FhirEventViewSet(viewsets.GenericViewSet):
    permission_classes = [InteropPermission]
    serializer_class = FhirEventSerializer
    queryset = FhirEvent.objects.none()

    def _get_event(self, request, pk) -> FhirEvent:
        obj = None
        if str(pk).isdecimal():
            obj = fhir_events_for(request_session(request)).filter(pk=int(pk)).first()
        if obj is None:
            raise NotFoundError(f"FHIR event {pk} not found.")
        return obj

    @extend_schema(tags=["Interoperability"], responses={200: FhirEventSerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        data = QueryCache.get_or_load(
            query_cache.FHIR_EVENTS,
            role=session.role,
            facility_id=session.facility_id,
            loader=lambda: list(FhirEventSerializer(list_fhir_events(session), many=True).data),
        )
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Interoperability"], responses={200: FhirEventSerializer})
    def retrieve(self, request, pk=None):
        return Response(FhirEventSerializer(self._get_event(request, pk)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Interoperability"], responses={200: MessageDetailsSerializer})
    @action(detail=True, methods=["get"])
    def details(self, request, pk=None):
        event = self._get_event(request, pk)
        return Response(MessageDetailsSerializer(message_details(event)).data, status=status.HTTP_200_OK)


class QualityScoreViewSet(viewsets.GenericViewSet):
    permission_classes = [DataQualityPermission]
    serializer_class = QualityScoreSerializer
    queryset = QualityScore.objects.none()

    @extend_schema(tags=["Data Quality"], responses={200: QualityScoreSerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        data = QueryCache.get_or_load(
            query_cache.QUALITY_SCORES,
            role=session.role,
            facility_id=session.facility_id,
            loader=lambda: [
                dict(QualityScoreSerializer(asdict(row)).data) for row in list_quality_scores(session)
            ],
        )
        return Response(data, status=status.HTTP_200_OK)
