"""Location search and weather endpoints.

Authentication: none; both endpoints are public.
Successful responses keep the upstream OpenWeatherMap shape (a bare list of
locations, or the raw current-weather object). Failures are rendered by
`config.api.exceptions.custom_exception_handler` into the standard error
envelope (status/message/data/errors).
"""

from __future__ import annotations

from asgiref.sync import async_to_sync
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
)
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.api.openapi import error_envelope_serializer

from .errors import InvalidInput
from .serializers import (
    LocationCandidateSerializer,
    SearchParamsSerializer,
    WeatherParamsSerializer,
    serialize_candidates,
)
from .services import resolve_weather, search_locations

lookup_error_schema = error_envelope_serializer("LookupErrorResponse")


class LocationSearchView(APIView):
    """Autocomplete city names.

    Response: list of at most five `{name, country, state?, lat, lon}`
    objects; empty for queries shorter than two characters.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Partial city name (at least 2 characters)",
            ),
        ],
        responses={
            200: LocationCandidateSerializer(many=True),
            400: lookup_error_schema,
            500: lookup_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        serializer = SearchParamsSerializer(data=request.query_params)
        if not serializer.is_valid():
            raise InvalidInput("Query parameter is required")
        query = str(serializer.validated_data["q"])

        candidates = async_to_sync(search_locations)(query)
        return Response(serialize_candidates(candidates))


class CurrentWeatherView(APIView):
    """Resolve a location name and return its current weather.

    Response: the upstream current-weather object in metric units.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="location",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description='City name, e.g. "London" or "Paris, FR"',
            ),
        ],
        responses={
            200: OpenApiTypes.OBJECT,
            400: lookup_error_schema,
            404: lookup_error_schema,
            500: lookup_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        serializer = WeatherParamsSerializer(data=request.query_params)
        if not serializer.is_valid():
            raise InvalidInput("Location parameter is required")
        location = str(serializer.validated_data["location"])

        record = async_to_sync(resolve_weather)(location)
        return Response(dict(record.raw))
