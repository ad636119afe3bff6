from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..errors import ConfigurationError, ProviderUnavailable
from ..metrics import (
    lookup_provider_errors_total,
    lookup_provider_latency_seconds,
    lookup_provider_requests_total,
)
from .base import ProviderGateway
from .payloads import parse_candidate, parse_weather
from .types import LocationCandidate, WeatherRecord

logger = logging.getLogger(__name__)

DEFAULT_GEO_URL = "https://api.openweathermap.org/geo/1.0/direct"
DEFAULT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class OpenWeatherGateway(ProviderGateway):
    """OpenWeatherMap implementation.

    Geocoding uses `/geo/1.0/direct`; current conditions use
    `/data/2.5/weather` with `units=metric`. The credential is checked
    before any request is built. One outbound call per operation, no retry.
    """

    name = "openweather"

    def __init__(
        self,
        *,
        api_key: str | None,
        geo_url: str = DEFAULT_GEO_URL,
        weather_url: str = DEFAULT_WEATHER_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.geo_url = geo_url
        self.weather_url = weather_url
        self.timeout = timeout
        self.transport = transport

    async def geocode(
        self, query: str, limit: int
    ) -> tuple[LocationCandidate, ...]:
        api_key = self._require_key()
        payload = await self._request(
            self.geo_url,
            {"q": query, "limit": limit, "appid": api_key},
            endpoint="geocoding",
        )
        if not isinstance(payload, list):
            raise ProviderUnavailable("geocoding")

        candidates: list[LocationCandidate] = []
        for entry in payload:
            candidate = parse_candidate(entry)
            if candidate is not None:
                candidates.append(candidate)
        return tuple(candidates[: max(limit, 0)])

    async def current_weather(
        self, latitude: float, longitude: float
    ) -> WeatherRecord:
        api_key = self._require_key()
        payload = await self._request(
            self.weather_url,
            {
                "lat": latitude,
                "lon": longitude,
                "appid": api_key,
                "units": "metric",
            },
            endpoint="weather",
        )
        record = parse_weather(payload)
        if record is None:
            raise ProviderUnavailable("weather")
        return record

    def _require_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError()
        return self.api_key

    async def _request(
        self, url: str, params: dict[str, Any], *, endpoint: str
    ) -> Any:
        lookup_provider_requests_total.labels(
            provider=self.name, endpoint=endpoint
        ).inc()
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            self._record_error(endpoint, exc.__class__.__name__)
            logger.warning(
                "lookup.provider.failed endpoint=%s err=%s",
                endpoint,
                exc.__class__.__name__,
            )
            raise ProviderUnavailable(endpoint) from exc
        finally:
            duration = time.perf_counter() - start_time
            lookup_provider_latency_seconds.labels(
                provider=self.name, endpoint=endpoint
            ).observe(duration)

        if response.is_error:
            self._record_error(endpoint, f"http_{response.status_code}")
            logger.warning(
                "lookup.provider.failed endpoint=%s status=%s",
                endpoint,
                response.status_code,
            )
            raise ProviderUnavailable(endpoint, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            self._record_error(endpoint, "bad_json")
            raise ProviderUnavailable(endpoint) from exc

    def _record_error(self, endpoint: str, error_type: str) -> None:
        lookup_provider_errors_total.labels(
            provider=self.name,
            endpoint=endpoint,
            error_type=error_type,
        ).inc()
