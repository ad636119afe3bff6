from __future__ import annotations

from typing import cast

from django.conf import settings

from .base import ProviderGateway
from .openweather import (
    DEFAULT_GEO_URL,
    DEFAULT_WEATHER_URL,
    OpenWeatherGateway,
)


def build_gateway() -> ProviderGateway:
    """Instantiate the provider gateway from settings.

    A missing credential is not an error here; the gateway raises
    `ConfigurationError` when an operation is attempted.
    """

    return OpenWeatherGateway(
        api_key=cast(
            str | None, getattr(settings, "OPENWEATHER_API_KEY", None)
        ),
        geo_url=str(
            getattr(settings, "OPENWEATHER_GEO_URL", DEFAULT_GEO_URL)
        ),
        weather_url=str(
            getattr(settings, "OPENWEATHER_WEATHER_URL", DEFAULT_WEATHER_URL)
        ),
        timeout=float(getattr(settings, "OPENWEATHER_TIMEOUT_S", 10.0)),
    )
