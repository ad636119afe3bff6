from __future__ import annotations

from abc import ABC, abstractmethod

from .types import LocationCandidate, WeatherRecord


class ProviderGateway(ABC):
    """Abstract base for geocoding/weather providers."""

    name: str

    @abstractmethod
    async def geocode(
        self, query: str, limit: int
    ) -> tuple[LocationCandidate, ...]:
        """Return at most `limit` matches in upstream order."""

    @abstractmethod
    async def current_weather(
        self, latitude: float, longitude: float
    ) -> WeatherRecord:
        """Return current conditions for the coordinates, metric units."""
