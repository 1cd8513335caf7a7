# hie_core/iam/api/routes.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from hie_core.common.api.exceptions import NotFoundError
from hie_core.iam.api.schema_serializers import (
    RouteAuthorizeRequestSerializer,
    RouteAuthorizeResponseSerializer,
)
from hie_core.iam.guard import authorize_path
from hie_core.iam.resolver import request_session


class RouteAuthorizeView(APIView):
    """
    Render-vs-redirect decision for a console route.

    Anonymous callers get redirect_sign_in rather than a 401.
    """
    permission_classes = [AllowAny]

    @extend_schema(
        request=RouteAuthorizeRequestSerializer,
        responses={200: RouteAuthorizeResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        s = RouteAuthorizeRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        path = s.validated_data["path"].rstrip("/") or "/"

        decision = authorize_path(request_session(request), path)
        if decision is None:
            raise NotFoundError(f"Unknown route: {path}")

        return Response(
            {
                "path": path,
                "outcome": decision.outcome,
                "redirect_to": decision.redirect_to,
            }
        )
