# hie_core/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

import structlog
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer

from hie_core.audit.models import AuditStatus
from hie_core.audit.services import LOGIN, LOGIN_FAILED, AuditService, client_ip
from hie_core.common.api.exceptions import AuthenticationError, AuthorizationError
from hie_core.iam.api.schema_serializers import (
    DetailResponseSerializer,
    LoginRequestSerializer,
    SignUpRequestSerializer,
)
from hie_core.iam.resolver import session_for_user
from hie_core.iam.services import IdentityService, normalize_email

logger = structlog.get_logger(__name__)


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 means "session cookie"
        return 0


def _set_auth_cookies(response: Response, *, access: str, refresh: str) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}

    access_name = jwt_cfg.get("AUTH_COOKIE", "hie_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "hie_refresh")

    access_lifetime = _seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=10)))
    refresh_lifetime = _seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=14)))

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=access_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    response.set_cookie(
        refresh_name,
        refresh,
        max_age=refresh_lifetime,
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    access_name = jwt_cfg.get("AUTH_COOKIE", "hie_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "hie_refresh")
    response.delete_cookie(access_name, path="/")
    response.delete_cookie(refresh_name, path="/")


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        # bad credentials stay 401 with no authentication classes
        return 'Bearer realm="api"'

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        s = LoginRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        email = normalize_email(s.validated_data["email"])

        serializer = TokenObtainPairSerializer(
            data={"username": email, "password": s.validated_data["password"]}
        )
        try:
            serializer.is_valid(raise_exception=True)
        except AuthenticationFailed:
            AuditService.log(
                action=LOGIN_FAILED,
                user=email,
                resource="Session",
                status=AuditStatus.FAILED,
                ip=client_ip(request),
            )
            raise AuthenticationError()

        session = session_for_user(serializer.user)
        AuditService.log(
            action=LOGIN,
            user=email,
            resource=session.facility_name or "Session",
            ip=client_ip(request),
            facility_id=session.facility_id,
        )

        res = Response({"detail": "login ok"}, status=status.HTTP_200_OK)
        _set_auth_cookies(
            res,
            access=serializer.validated_data["access"],
            refresh=serializer.validated_data["refresh"],
        )
        return res


class SignUpView(APIView):
    """
    Self-service sign-up for the Ministry-of-Health role.
    Disabled unless HIE_CONSOLE["ALLOW_MOH_SELF_SIGNUP"] is set.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        request=SignUpRequestSerializer,
        responses={201: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        if not settings.HIE_CONSOLE.get("ALLOW_MOH_SELF_SIGNUP", False):
            raise AuthorizationError("Self-service sign-up is disabled.")

        s = SignUpRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        user = IdentityService.sign_up(
            email=d["email"],
            password=d["password"],
            first_name=d.get("first_name") or "",
            last_name=d.get("last_name") or "",
        )
        return Response({"detail": "signed up", "user_id": user.pk}, status=status.HTTP_201_CREATED)


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        request=None,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        refresh_cookie_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "hie_refresh")
        refresh = request.COOKIES.get(refresh_cookie_name)

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh", refresh)

        res = Response({"detail": "refreshed"}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res
