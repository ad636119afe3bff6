"""Plain-text rendering helpers for weather records."""

from __future__ import annotations

import math

from .engines.types import WeatherRecord
from .timeutils import from_epoch

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip

NOT_AVAILABLE = "n/a"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_temp(temp: float) -> int:
    return _round_half_up(temp)


def wind_direction(degrees: float) -> str:
    """Map degrees (0-360) onto a 16-point compass."""

    return COMPASS_POINTS[_round_half_up(degrees / 22.5) % 16]


def format_visibility(meters: int) -> str:
    return f"{meters / 1000:.1f} km"


def format_local_time(epoch: int, offset_seconds: int = 0) -> str:
    """Return e.g. "7:30 AM" at the location's UTC offset."""

    local = from_epoch(epoch, offset_seconds)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_local_date(epoch: int, offset_seconds: int = 0) -> str:
    """Return e.g. "Dec 25, 2024" at the location's UTC offset."""

    local = from_epoch(epoch, offset_seconds)
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


def _temp(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{round_temp(value)}°C"


def summarize(record: WeatherRecord) -> str:
    offset = record.timezone_offset
    place = ", ".join(p for p in (record.city_name, record.country_code) if p)

    wind = NOT_AVAILABLE
    if record.wind_speed is not None:
        wind = f"{record.wind_speed:.1f} m/s"
        if record.wind_degrees is not None:
            wind = f"{wind} {wind_direction(record.wind_degrees)}"

    visibility = NOT_AVAILABLE
    if record.visibility_meters is not None:
        visibility = format_visibility(record.visibility_meters)

    humidity = NOT_AVAILABLE
    if record.humidity is not None:
        humidity = f"{record.humidity}%"

    pressure = NOT_AVAILABLE
    if record.pressure is not None:
        pressure = f"{record.pressure} hPa"

    sunrise = NOT_AVAILABLE
    if record.sunrise_epoch is not None:
        sunrise = format_local_time(record.sunrise_epoch, offset)
    sunset = NOT_AVAILABLE
    if record.sunset_epoch is not None:
        sunset = format_local_time(record.sunset_epoch, offset)

    observed = (
        f"{format_local_date(record.observed_at_epoch, offset)} "
        f"{format_local_time(record.observed_at_epoch, offset)}"
    )

    lines = [
        place or NOT_AVAILABLE,
        record.condition_summary or NOT_AVAILABLE,
        f"Temperature: {_temp(record.temperature)} "
        f"(feels like {_temp(record.feels_like)})",
        f"Min/Max: {_temp(record.temp_min)} / {_temp(record.temp_max)}",
        f"Humidity: {humidity}",
        f"Pressure: {pressure}",
        f"Wind: {wind}",
        f"Visibility: {visibility}",
        f"Sunrise: {sunrise}",
        f"Sunset: {sunset}",
        f"Observed: {observed}",
    ]
    return "\n".join(lines)
