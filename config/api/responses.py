from __future__ import annotations

from typing import TypeAlias

from rest_framework import status
from rest_framework.response import Response

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


def error_payload(
    message: str, *, errors: JSONValue | None = None
) -> dict[str, JSONValue]:
    return {
        "status": 1,
        "message": message,
        "data": None,
        "errors": errors,
    }


def error_response(
    message: str,
    *,
    errors: JSONValue | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    return Response(error_payload(message, errors=errors), status=status_code)
