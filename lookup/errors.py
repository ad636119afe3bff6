"""Failure taxonomy for location search and weather resolution.

Each error is a DRF `APIException`, so the global exception handler in
`config.api.exceptions` renders it into the standard error envelope with
the matching status code.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException


class LookupFailure(APIException):
    """Base class for every typed lookup failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Weather lookup failed"
    default_code = "lookup_failed"


class ConfigurationError(LookupFailure):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "OpenWeather API key is not configured"
    default_code = "missing_config"


class InvalidInput(LookupFailure):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Query parameter is required"
    default_code = "invalid_input"


class LocationNotFound(LookupFailure):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "location_not_found"

    def __init__(self, location: str) -> None:
        super().__init__(f"City not found: {location}")
        self.location = location


class ProviderUnavailable(LookupFailure):
    """Upstream transport failure or non-success response.

    `upstream_status` is None when no response was received.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "provider_unavailable"

    def __init__(
        self,
        endpoint: str,
        upstream_status: int | None = None,
    ) -> None:
        stage = endpoint.capitalize()
        if upstream_status is None:
            message = f"{stage} API request failed"
        else:
            message = f"{stage} API Error: {upstream_status}"
        super().__init__(message)
        self.endpoint = endpoint
        self.upstream_status = upstream_status


class SearchUnavailable(LookupFailure):
    """Autocomplete could not reach the provider.

    The upstream stage and status stay on `__cause__`; callers only see the
    generic message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to search locations"
    default_code = "search_unavailable"
