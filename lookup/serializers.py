from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from rest_framework import serializers

from .engines.types import LocationCandidate


class SearchParamsSerializer(serializers.Serializer):
    q: ClassVar[serializers.CharField] = serializers.CharField(
        trim_whitespace=False
    )


class WeatherParamsSerializer(serializers.Serializer):
    location: ClassVar[serializers.CharField] = serializers.CharField()


class LocationCandidateSerializer(serializers.Serializer):
    """Upstream geocoding shape, as the presentation layer expects it."""

    name: ClassVar[serializers.CharField] = serializers.CharField()
    country: ClassVar[serializers.CharField] = serializers.CharField()
    state: ClassVar[serializers.CharField] = serializers.CharField(
        required=False
    )
    lat: ClassVar[serializers.FloatField] = serializers.FloatField()
    lon: ClassVar[serializers.FloatField] = serializers.FloatField()


def serialize_candidates(
    candidates: Sequence[LocationCandidate],
) -> list[dict[str, Any]]:
    return [candidate.as_payload() for candidate in candidates]
