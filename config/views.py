"""Project-level non-DRF views.

This module contains the root landing endpoint used for quick service checks
and links to the lookup endpoints and interactive API documentation.
"""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "weather-lookup",
            "search": "/search?q=",
            "weather": "/weather?location=",
            "docs": "/api/docs/",
            "redoc": "/api/redoc/",
        }
    )
