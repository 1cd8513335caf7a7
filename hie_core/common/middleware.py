# hie_core/common/middleware.py
from __future__ import annotations

import structlog
from django.utils.deprecation import MiddlewareMixin

from hie_core.common.api.exceptions import ensure_request_id

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(MiddlewareMixin):
    """
    Gives every request a request_id (reusing an inbound X-Request-Id when
    present) and binds it into structlog's context for the duration of the
    request. The same id is echoed in the error envelope and response header.
    """

    def process_request(self, request):
        inbound = request.META.get("HTTP_X_REQUEST_ID")
        if inbound:
            request.request_id = inbound[:64]
        rid = ensure_request_id(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=rid, path=request.path, method=request.method)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[REQUEST_ID_HEADER] = rid
        structlog.contextvars.clear_contextvars()
        return response
