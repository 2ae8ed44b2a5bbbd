"""Domain error taxonomy and the DRF exception handler.

Every module-level exception derives from one of two families:

- ``NotFound``: a referenced id does not resolve (HTTP 404).
- ``InvalidState``: a status precondition is not met, e.g. an empty
  cart or an agent that is not available (HTTP 400).

Views translate these explicitly.  Anything else that escapes a view
is an unexpected failure: it is logged with its traceback and answered
with a generic 500 body that does not leak the original message.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

UNEXPECTED_ERROR_DETAIL = "An unexpected error occurred."


class DomainError(Exception):
    """Base class for business-rule failures raised by the service layer."""


class NotFound(DomainError):
    """A referenced entity id does not resolve."""


class InvalidState(DomainError):
    """A precondition on an entity's status (or a cart's content) is not met."""


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    if isinstance(exc, NotFound):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, InvalidState):
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    logger.exception(
        "api.unexpected_error",
        view=type(view).__name__ if view is not None else None,
        error_type=type(exc).__name__,
    )
    return Response(
        {"detail": UNEXPECTED_ERROR_DETAIL},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
