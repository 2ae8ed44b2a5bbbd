import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Tag every request and its log lines with a correlation ID.

    The admin console and the agent app send ``X-Request-ID``; other
    callers get a fresh UUID4.  The ID is bound into structlog's context
    variables for the lifetime of the request, echoed back in the
    response header, and unbound once the response is produced so worker
    threads never leak it into the next request.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        token = correlation_id_var.set(cid)
        structlog.contextvars.bind_contextvars(
            correlation_id=cid, method=request.method, path=request.path
        )
        started = time.monotonic()

        try:
            response = self.get_response(request)
            logger.info(
                "http.request",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.unbind_contextvars("correlation_id", "method", "path")
            correlation_id_var.reset(token)

        response[REQUEST_ID_HEADER] = cid
        return response
