from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LocationCandidate:
    """One geocoding match.

    Two cities can share a name, so equality and hashing use the
    coordinate pair only.
    """

    name: str = field(compare=False)
    country: str = field(compare=False)
    latitude: float
    longitude: float
    state: str | None = field(default=None, compare=False)

    @property
    def label(self) -> str:
        if self.state:
            return f"{self.name}, {self.state}, {self.country}"
        return f"{self.name}, {self.country}"

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "country": self.country,
            "lat": self.latitude,
            "lon": self.longitude,
        }
        if self.state:
            payload["state"] = self.state
        return payload


@dataclass(frozen=True)
class WeatherRecord:
    """Current conditions for one location, in metric units."""

    city_name: str
    country_code: str
    temperature: float | None
    feels_like: float | None
    temp_min: float | None
    temp_max: float | None
    humidity: int | None
    pressure: int | None
    visibility_meters: int | None
    wind_speed: float | None
    wind_degrees: int | None
    condition_summary: str
    condition_icon: str
    sunrise_epoch: int | None
    sunset_epoch: int | None
    observed_at_epoch: int
    timezone_offset: int = 0
    raw: Mapping[str, Any] = field(
        default_factory=dict, compare=False, repr=False
    )

    @property
    def identity(self) -> tuple[str, str, int]:
        return (self.city_name, self.country_code, self.observed_at_epoch)
