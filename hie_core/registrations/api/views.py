# hie_core/registrations/api/views.py
from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from hie_core.common import cache as query_cache
from hie_core.common.api.exceptions import NotFoundError, ValidationError
from hie_core.common.cache import QueryCache
from hie_core.iam.resolver import request_session
from hie_core.registrations.api.permissions import RegistrationPermission
from hie_core.registrations.api.serializers import (
    ApprovalResultSerializer,
    ApproveRequestSerializer,
    RegistrationRequestSerializer,
    RegistrationSubmitResponse,
    RegistrationSubmitSerializer,
)
from hie_core.registrations.filters import RegistrationRequestFilter
from hie_core.registrations.models import RegistrationRequest, RegistrationStatus
from hie_core.registrations.selectors import registrations_for
from hie_core.registrations.services import RegistrationApprovalService, RegistrationIntakeService


def _request_id(pk) -> int:
    if not str(pk).isdecimal():
        raise NotFoundError(f"Registration request {pk} not found.")
    return int(pk)


class RegistrationSubmitView(APIView):
    """Public registration form endpoint. No authentication."""
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        tags=["Registrations"],
        request=RegistrationSubmitSerializer,
        responses={201: RegistrationSubmitResponse},
    )
    def post(self, request):
        s = RegistrationSubmitSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        req = RegistrationIntakeService.submit_registration(
            type=s.validated_data["type"],
            form_data=s.validated_data["data"],
        )
        return Response(
            {"id": req.id, "status": req.status, "submitted_at": req.submitted_at},
            status=status.HTTP_201_CREATED,
        )


class RegistrationRequestViewSet(viewsets.GenericViewSet):
    """
    MoH review queue. Lists pending requests unless ?status= says otherwise.
    """
    permission_classes = [RegistrationPermission]
    serializer_class = RegistrationRequestSerializer
    queryset = RegistrationRequest.objects.none()
    filterset_class = RegistrationRequestFilter

    def get_queryset(self):
        return registrations_for(request_session(self.request))

    @extend_schema(tags=["Registrations"], responses={200: RegistrationRequestSerializer(many=True)})
    def list(self, request):
        session = request_session(request)
        params = request.query_params.copy()
        params.setdefault("status", RegistrationStatus.PENDING)

        filterset = RegistrationRequestFilter(params, queryset=self.get_queryset())
        if not filterset.is_valid():
            raise ValidationError({k: [str(m) for m in v] for k, v in filterset.errors.items()})

        def load():
            return list(RegistrationRequestSerializer(filterset.qs, many=True).data)

        # the cache key carries no filters, so only the default view is cached
        if list(params.keys()) == ["status"] and params.get("status") == RegistrationStatus.PENDING:
            data = QueryCache.get_or_load(
                query_cache.REGISTRATIONS,
                role=session.role,
                facility_id=session.facility_id,
                loader=load,
            )
        else:
            data = load()
        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Registrations"], responses={200: RegistrationRequestSerializer})
    def retrieve(self, request, pk=None):
        obj = self.get_queryset().filter(pk=_request_id(pk)).first()
        if obj is None:
            raise NotFoundError(f"Registration request {pk} not found.")
        return Response(RegistrationRequestSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Registrations"],
        request=ApproveRequestSerializer,
        responses={200: ApprovalResultSerializer},
    )
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        s = ApproveRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        result = RegistrationApprovalService.approve(
            actor=request_session(request),
            request_id=_request_id(pk),
            email=d.get("email") or None,
            temporary_password=d.get("temporary_password") or None,
            display_name=d.get("name") or None,
            target_role=d.get("role") or None,
        )
        return Response(ApprovalResultSerializer(asdict(result)).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Registrations"], request=None, responses={200: RegistrationRequestSerializer})
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        req = RegistrationApprovalService.reject(
            actor=request_session(request),
            request_id=_request_id(pk),
        )
        return Response(RegistrationRequestSerializer(req).data, status=status.HTTP_200_OK)
