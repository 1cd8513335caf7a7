# hie_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from hie_core.audit.api.permissions import AuditLogPermission
from hie_core.audit.api.serializers import AuditLogSerializer
from hie_core.audit.models import AuditLog
from hie_core.audit.selectors import list_audit_logs
from hie_core.common import cache as query_cache
from hie_core.common.cache import QueryCache
from hie_core.iam.resolver import request_session


class AuditLogViewSet(viewsets.GenericViewSet):
    """
    Latest audit entries (scoped by role), newest first.
    """
    permission_classes = [AuditLogPermission]

    serializer_class = AuditLogSerializer
    queryset = AuditLog.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditLogSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="action",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by action code (e.g. FACILITY_APPROVED, CONSENT_REVOKED).",
            ),
        ],
    )
    def list(self, request):
        session = request_session(request)
        action_code = (request.query_params.get("action") or "").strip() or None

        if action_code:
            data = AuditLogSerializer(list_audit_logs(session, action=action_code), many=True).data
        else:
            data = QueryCache.get_or_load(
                query_cache.AUDIT_LOGS,
                role=session.role,
                facility_id=session.facility_id,
                loader=lambda: list(AuditLogSerializer(list_audit_logs(session), many=True).data),
            )
        return Response(data, status=status.HTTP_200_OK)
