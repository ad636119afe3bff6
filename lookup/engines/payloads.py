"""Coercion of OpenWeatherMap JSON into lookup types.

Shared by the provider gateway (upstream bodies) and `lookup.client`
(bodies relayed by our own endpoints, which keep the upstream shape).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .types import LocationCandidate, WeatherRecord


def to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_int(value: Any) -> int | None:
    number = to_float(value)
    if number is None:
        return None
    return int(number)


def _block(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else {}


def parse_candidate(entry: Any) -> LocationCandidate | None:
    """Return a candidate, or None when the entry lacks coordinates."""

    if not isinstance(entry, Mapping):
        return None
    lat = to_float(entry.get("lat"))
    lon = to_float(entry.get("lon"))
    if lat is None or lon is None:
        return None
    state = entry.get("state")
    return LocationCandidate(
        name=str(entry.get("name") or ""),
        country=str(entry.get("country") or ""),
        latitude=lat,
        longitude=lon,
        state=str(state) if state else None,
    )


def parse_weather(payload: Any) -> WeatherRecord | None:
    """Return a record, or None when the body has no observation time."""

    if not isinstance(payload, Mapping):
        return None
    observed_at = to_int(payload.get("dt"))
    if observed_at is None:
        return None

    main = _block(payload, "main")
    wind = _block(payload, "wind")
    sys_block = _block(payload, "sys")
    conditions = payload.get("weather")
    condition: Mapping[str, Any] = {}
    if (
        isinstance(conditions, list)
        and conditions
        and isinstance(conditions[0], Mapping)
    ):
        condition = conditions[0]

    offset = to_int(payload.get("timezone")) or 0
    if not -86400 < offset < 86400:
        offset = 0

    return WeatherRecord(
        city_name=str(payload.get("name") or ""),
        country_code=str(sys_block.get("country") or ""),
        temperature=to_float(main.get("temp")),
        feels_like=to_float(main.get("feels_like")),
        temp_min=to_float(main.get("temp_min")),
        temp_max=to_float(main.get("temp_max")),
        humidity=to_int(main.get("humidity")),
        pressure=to_int(main.get("pressure")),
        visibility_meters=to_int(payload.get("visibility")),
        wind_speed=to_float(wind.get("speed")),
        wind_degrees=to_int(wind.get("deg")),
        condition_summary=str(condition.get("description") or ""),
        condition_icon=str(condition.get("icon") or ""),
        sunrise_epoch=to_int(sys_block.get("sunrise")),
        sunset_epoch=to_int(sys_block.get("sunset")),
        observed_at_epoch=observed_at,
        timezone_offset=offset,
        raw=dict(payload),
    )
