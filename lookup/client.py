"""Async client for the `/search` and `/weather` endpoints.

Used from the presentation side: `LookupClient.search` is the search
function handed to `SearchOrchestrator`, and `LookupClient.weather` loads
the record for a selected or typed location. Errors surface only as a
message, which is all the presentation layer distinguishes.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .engines.payloads import parse_candidate, parse_weather
from .engines.types import LocationCandidate, WeatherRecord

logger = logging.getLogger(__name__)


class LookupClientError(Exception):
    """Raised when an endpoint call fails; `message` is user-facing."""

    def __init__(
        self, message: str, *, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LookupClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def search(self, query: str) -> tuple[LocationCandidate, ...]:
        payload = await self._get(
            "/search",
            {"q": query},
            fallback="Failed to search locations",
        )
        if not isinstance(payload, list):
            raise LookupClientError("Failed to search locations")
        candidates = (parse_candidate(entry) for entry in payload)
        return tuple(c for c in candidates if c is not None)

    async def weather(self, location: str) -> WeatherRecord:
        payload = await self._get(
            "/weather",
            {"location": location},
            fallback="Failed to fetch weather data",
        )
        record = parse_weather(payload)
        if record is None:
            raise LookupClientError("Failed to fetch weather data")
        return record

    async def _get(
        self, path: str, params: dict[str, str], *, fallback: str
    ) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning("lookup.client.failed path=%s err=%s", path, exc)
            raise LookupClientError(fallback) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = fallback
            if isinstance(body, dict) and isinstance(body.get("message"), str):
                message = body["message"]
            raise LookupClientError(message, status_code=response.status_code)
        return body
