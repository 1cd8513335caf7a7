# hie_core/iam/api/session.py

from __future__ import annotations

from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from hie_core.iam import navigation
from hie_core.iam.api.schema_serializers import SessionBootstrapResponseSerializer
from hie_core.iam.resolver import Identity, SessionRoleResolver
from hie_core.iam.signals import session_resolved

API_VERSION = "0.1.0"


class SessionBootstrapView(APIView):
    """
    Frontend bootstrap endpoint, called after every sign-in/refresh.

    - Resolves the profile with polling (profile rows may lag identity creation).
    - Role-pending accounts get state "pending_provisioning" and land on the
      pending-setup page; this endpoint never fails because a role is missing.
    - Returns everything needed for UI initialization.
    """
    permission_classes = [IsAuthenticated]
    resolver_class = SessionRoleResolver

    @extend_schema(
        responses={200: SessionBootstrapResponseSerializer},
        tags=["IAM"],
    )
    def get(self, request):
        session = self.resolver_class().resolve(Identity.from_user(request.user))
        session_resolved.send(sender=self.__class__, session=session)

        return Response(
            {
                "profile": session.as_dict(),
                "landing_route": navigation.landing_route(session),
                "sidebar_label": navigation.sidebar_label(session),
                "menu": [item.as_dict() for item in navigation.menu_for(session)],
                "server_time": timezone.now(),
                "api_version": API_VERSION,
            }
        )
