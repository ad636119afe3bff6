from __future__ import annotations

# ruff: noqa: S101
import asyncio

import pytest
from django.conf import LazySettings

from lookup.engines.types import LocationCandidate
from lookup.errors import (
    ConfigurationError,
    InvalidInput,
    LocationNotFound,
    ProviderUnavailable,
    SearchUnavailable,
)
from lookup.services import SEARCH_LIMIT, resolve_weather, search_locations
from lookup.tests.fakes import LONDON, FakeGateway


def test_search_short_query_skips_provider() -> None:
    gateway = FakeGateway(matches={"L": (LONDON,)})

    for query in ("", "L"):
        assert asyncio.run(search_locations(query, gateway)) == ()
    assert gateway.geocode_calls == []


def test_search_requests_five_candidates() -> None:
    matches = tuple(
        LocationCandidate(
            name="San Jose", country="US", latitude=float(i), longitude=0.0
        )
        for i in range(7)
    )
    gateway = FakeGateway(matches={"San": matches})

    result = asyncio.run(search_locations("San", gateway))

    assert gateway.geocode_calls == [("San", SEARCH_LIMIT)]
    assert SEARCH_LIMIT == 5
    assert len(result) == 5
    assert isinstance(result, tuple)


def test_search_returns_empty_tuple_for_no_matches() -> None:
    gateway = FakeGateway()

    assert asyncio.run(search_locations("Zzqx", gateway)) == ()
    assert gateway.geocode_calls == [("Zzqx", 5)]


def test_search_folds_provider_failure_into_generic_error() -> None:
    cause = ProviderUnavailable("geocoding", 502)
    gateway = FakeGateway(geocode_error=cause)

    with pytest.raises(SearchUnavailable) as excinfo:
        asyncio.run(search_locations("London", gateway))

    assert str(excinfo.value.detail) == "Failed to search locations"
    assert excinfo.value.__cause__ is cause


def test_search_keeps_configuration_error() -> None:
    gateway = FakeGateway(geocode_error=ConfigurationError())

    with pytest.raises(ConfigurationError):
        asyncio.run(search_locations("London", gateway))


def test_resolve_weather_london_scenario() -> None:
    gateway = FakeGateway(matches={"London": (LONDON,)})

    record = asyncio.run(resolve_weather("London", gateway))

    assert gateway.geocode_calls == [("London", 1)]
    assert gateway.weather_calls == [(51.51, -0.13)]
    assert record is gateway.weather
    assert record.city_name == "London"


def test_resolve_weather_uses_first_match_coordinates() -> None:
    first = LocationCandidate(
        name="Paris", country="FR", latitude=48.85, longitude=2.35
    )
    second = LocationCandidate(
        name="Paris", country="US", latitude=33.66, longitude=-95.55
    )
    gateway = FakeGateway(matches={"Paris": (first, second)})

    asyncio.run(resolve_weather("Paris", gateway))

    assert gateway.weather_calls == [(48.85, 2.35)]


def test_resolve_weather_not_found_carries_input() -> None:
    gateway = FakeGateway()

    with pytest.raises(LocationNotFound) as excinfo:
        asyncio.run(resolve_weather("Zzqx", gateway))

    assert excinfo.value.location == "Zzqx"
    assert str(excinfo.value.detail) == "City not found: Zzqx"
    assert excinfo.value.status_code == 404
    assert gateway.weather_calls == []


def test_resolve_weather_geocode_failure_short_circuits() -> None:
    gateway = FakeGateway(
        matches={"London": (LONDON,)},
        geocode_error=ProviderUnavailable("geocoding", 500),
    )

    with pytest.raises(ProviderUnavailable):
        asyncio.run(resolve_weather("London", gateway))
    assert gateway.weather_calls == []


def test_resolve_weather_reports_weather_stage_failure() -> None:
    gateway = FakeGateway(
        matches={"London": (LONDON,)},
        weather_error=ProviderUnavailable("weather", 503),
    )

    with pytest.raises(ProviderUnavailable) as excinfo:
        asyncio.run(resolve_weather("London", gateway))
    assert excinfo.value.upstream_status == 503
    assert len(gateway.weather_calls) == 1


def test_resolve_weather_rejects_blank_location() -> None:
    gateway = FakeGateway()

    with pytest.raises(InvalidInput):
        asyncio.run(resolve_weather("   ", gateway))
    assert gateway.geocode_calls == []


def test_resolve_weather_without_credential_uses_settings(
    settings: LazySettings,
) -> None:
    settings.OPENWEATHER_API_KEY = None

    with pytest.raises(ConfigurationError):
        asyncio.run(resolve_weather("London"))
