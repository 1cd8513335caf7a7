# hie_core/governance/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from hie_core.audit.services import client_ip
from hie_core.common import cache as query_cache
from hie_core.common.cache import QueryCache
from hie_core.governance.api.permissions import GovernancePermission
from hie_core.governance.api.serializers import ConsentRecordSerializer, MpiRecordSerializer
from hie_core.governance.models import ConsentRecord, MpiRecord
from hie_core.governance.selectors import list_consent_records, list_mpi_records
from hie_core.governance.services import ConsentService
from hie_core.iam.resolver import request_session


class ConsentRecordViewSet(viewsets.GenericViewSet):
    permission_classes = [GovernancePermission]
    serializer_class = ConsentRecordSerializer
    queryset = ConsentRecord.objects.none()
    lookup_field = "patient_id"

    @extend_schema(tags=["Governance"], responses={200: ConsentRecordSerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        data = QueryCache.get_or_load(
            query_cache.CONSENTS,
            role=session.role,
            facility_id=session.facility_id,
            loader=lambda: list(ConsentRecordSerializer(list_consent_records(session), many=True).data),
        )
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Governance"], request=None, responses={200: ConsentRecordSerializer})
    @action(detail=True, methods=["post"])
    def revoke(self, request, patient_id=None):
        consent = ConsentService.revoke_consent(
            session=request_session(request),
            patient_id=patient_id,
            ip=client_ip(request),
        )
        return Response(ConsentRecordSerializer(consent).data, status=status.HTTP_200_OK)


class MpiRecordViewSet(viewsets.GenericViewSet):
    """Latest Master Patient Index entries, newest first."""
    permission_classes = [GovernancePermission]
    serializer_class = MpiRecordSerializer
    queryset = MpiRecord.objects.none()

    @extend_schema(tags=["Governance"], responses={200: MpiRecordSerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        data = QueryCache.get_or_load(
            query_cache.MPI_RECORDS,
            role=session.role,
            facility_id=session.facility_id,
            loader=lambda: list(MpiRecordSerializer(list_mpi_records(session), many=True).data),
        )
        return Response(data, status=status.HTTP_200_OK)
