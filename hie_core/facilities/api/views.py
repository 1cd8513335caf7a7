# hie_core/facilities/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import NotFoundError
from hie_core.common.cache import QueryCache
from hie_core.facilities.api.permissions import FacilityPermission
from hie_core.facilities.api.serializers import FacilitySerializer, FacilityStatusSerializer
from hie_core.facilities.models import Facility
from hie_core.facilities.selectors import facilities_for, list_facilities
from hie_core.facilities.services import FacilityService
from hie_core.iam.resolver import request_session


class FacilityViewSet(viewsets.GenericViewSet):
    permission_classes = [FacilityPermission]
    serializer_class = FacilitySerializer
    queryset = Facility.objects.none()

    @extend_schema(tags=["Facilities"], responses={200: FacilitySerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        data = QueryCache.get_or_load(
            query_cache.FACILITIES,
            role=session.role,
            facility_id=session.facility_id,
            loader=lambda: list(FacilitySerializer(list_facilities(session), many=True).data),
        )
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Facilities"], responses={200: FacilitySerializer})
    def retrieve(self, request, pk=None):
        session = request_session(request)
        # out-of-scope ids look exactly like unknown ids
        obj = facilities_for(session).filter(pk=pk).first() if str(pk).isdecimal() else None
        if obj is None:
            raise NotFoundError(f"Facility {pk} not found.")
        return Response(FacilitySerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Facilities"],
        request=FacilityStatusSerializer,
        responses={200: FacilitySerializer},
    )
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        s = FacilityStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        if not str(pk).isdecimal():
            raise NotFoundError(f"Facility {pk} not found.")

        session = request_session(request)
        obj = FacilityService.set_status(
            facility_id=int(pk),
            status=s.validated_data["status"],
            actor_label=session.email or str(session.user_id),
        )
        return Response(FacilitySerializer(obj).data, status=status.HTTP_200_OK)
