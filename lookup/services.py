from __future__ import annotations

import logging

from django.conf import settings

from .engines.base import ProviderGateway
from .engines.registry import build_gateway
from .engines.types import LocationCandidate, WeatherRecord
from .errors import (
    InvalidInput,
    LocationNotFound,
    LookupFailure,
    ProviderUnavailable,
    SearchUnavailable,
)
from .metrics import lookup_resolutions_total, lookup_searches_total

logger = logging.getLogger(__name__)

SEARCH_LIMIT = int(getattr(settings, "LOOKUP_SEARCH_LIMIT", 5))
MIN_QUERY_LENGTH = int(getattr(settings, "LOOKUP_MIN_QUERY_LENGTH", 2))


async def search_locations(
    query: str,
    gateway: ProviderGateway | None = None,
) -> tuple[LocationCandidate, ...]:
    """Return up to `SEARCH_LIMIT` candidates for autocomplete.

    Queries shorter than `MIN_QUERY_LENGTH` return an empty tuple without
    touching the provider. Upstream failures surface as `SearchUnavailable`.
    """

    if len(query) < MIN_QUERY_LENGTH:
        lookup_searches_total.labels(outcome="short").inc()
        return ()

    gateway = gateway or build_gateway()
    try:
        candidates = await gateway.geocode(query, SEARCH_LIMIT)
    except ProviderUnavailable as exc:
        logger.warning("lookup.search.failed query=%s err=%s", query, exc)
        lookup_searches_total.labels(outcome="error").inc()
        raise SearchUnavailable() from exc
    except LookupFailure:
        lookup_searches_total.labels(outcome="error").inc()
        raise

    logger.info("lookup.search query=%s count=%s", query, len(candidates))
    lookup_searches_total.labels(outcome="ok").inc()
    return candidates[:SEARCH_LIMIT]


async def resolve_weather(
    location: str,
    gateway: ProviderGateway | None = None,
) -> WeatherRecord:
    """Geocode `location`, then fetch weather for the first match.

    Any failure short-circuits the remaining stage. No retry.
    """

    if not location.strip():
        raise InvalidInput("Location parameter is required")

    gateway = gateway or build_gateway()
    try:
        matches = await gateway.geocode(location, 1)
        if not matches:
            raise LocationNotFound(location)

        first = matches[0]
        logger.info(
            "lookup.weather.geocoded location=%s lat=%s lon=%s",
            location,
            first.latitude,
            first.longitude,
        )
        record = await gateway.current_weather(first.latitude, first.longitude)
    except LocationNotFound:
        lookup_resolutions_total.labels(outcome="not_found").inc()
        raise
    except LookupFailure:
        lookup_resolutions_total.labels(outcome="error").inc()
        raise

    logger.info(
        "lookup.weather.resolved location=%s city=%s",
        location,
        record.city_name,
    )
    lookup_resolutions_total.labels(outcome="ok").inc()
    return record
