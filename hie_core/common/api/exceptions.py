# hie_core/common/api/exceptions.py

from __future__ import annotations

import uuid
from typing import Any

import structlog
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

__all__ = [
    "AlreadyRevokedError",
    "AuthenticationError",
    "AuthorizationError",
    "BackendUnavailableError",
    "ConflictError",
    "NotFoundError",
    "ProvisioningError",
    "SubmissionError",
    "ValidationError",
    "api_exception_handler",
    "build_error_envelope",
    "ensure_request_id",
]


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope for the console API.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": rid,
        }
    }


# -----------------------------
# Domain error taxonomy
# -----------------------------

class AuthenticationError(AuthenticationFailed):
    """401: bad credentials."""
    default_detail = "Invalid email or password."
    default_code = "authentication_failed"


class AuthorizationError(PermissionDenied):
    """403: authenticated, but the role is not allowed to do this."""
    default_detail = "Your role is not allowed to perform this action."
    default_code = "permission_denied"


class NotFoundError(NotFound):
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when the current state of a record blocks the action
    (revoking a revoked consent, approving a processed request).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class AlreadyRevokedError(ConflictError):
    default_detail = "Consent already revoked."
    default_code = "already_revoked"


class BackendUnavailableError(APIException):
    """503: a store/remote call failed. Never retried automatically."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Backend temporarily unavailable."
    default_code = "backend_unavailable"


class SubmissionError(BackendUnavailableError):
    default_detail = "Registration could not be submitted. Please try again."
    default_code = "submission_failed"


class ProvisioningError(BackendUnavailableError):
    default_detail = "User provisioning failed; the request is still pending."
    default_code = "provisioning_failed"


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception("unhandled_api_error", request_id=ensure_request_id(request))
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    # Message + details rules:
    # 1) {"detail": "..."} -> message=detail, details=None
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) otherwise -> message="Request failed.", details=data
    data = response.data
    message = "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=response.headers,
    )
