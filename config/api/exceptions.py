from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .responses import JSONValue

if TYPE_CHECKING:
    from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.views import exception_handler as drf_exception_handler

    from .responses import error_payload, error_response

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error(
            "api.unhandled_error err=%s",
            exc.__class__.__name__,
            exc_info=exc,
        )
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)
    message = "Request failed"
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            message = maybe

    if response.status_code >= 500:
        logger.warning(
            "api.request_failed status=%s message=%s",
            response.status_code,
            message,
        )

    response.data = error_payload(message, errors=detail)
    return response
