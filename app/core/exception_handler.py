"""
DRF exception handler for application errors.

Renders any BaseApplicationError raised from a view (or from a service the
view calls) as ``{"error", "error_code", "details"}`` with the status code of
the error kind. Everything else falls through to DRF's default handler.

Configured in settings:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handler.application_exception_handler",
    }
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def application_exception_handler(exc, context):
    """Convert BaseApplicationError into a JSON response."""
    if not isinstance(exc, BaseApplicationError):
        return exception_handler(exc, context)

    view = context.get("view")
    log_level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        log_level,
        f"{exc.__class__.__name__} raised in {view.__class__.__name__}",
        extra={
            "error_code": exc.error_code,
            "status_code": exc.status_code,
        },
    )
    return Response(exc.to_dict(), status=exc.status_code)
