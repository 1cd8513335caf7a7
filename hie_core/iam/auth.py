# hie_core/iam/auth.py

from __future__ import annotations

import structlog
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    Access token from `Authorization: Bearer`, else from the HttpOnly
    access cookie. The authenticated user id is bound into the request's
    log context.
    """

    def authenticate(self, request):
        if self.get_header(request):
            result = super().authenticate(request)
        else:
            raw_token = request.COOKIES.get(settings.SIMPLE_JWT.get("AUTH_COOKIE", "hie_access"))
            if not raw_token:
                return None
            validated_token = self.get_validated_token(raw_token)
            result = (self.get_user(validated_token), validated_token)

        if result is not None:
            structlog.contextvars.bind_contextvars(user_id=result[0].pk)
        return result
