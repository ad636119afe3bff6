from __future__ import annotations

from django.urls import path

from .views import CurrentWeatherView, LocationSearchView

urlpatterns = [
    path("search", LocationSearchView.as_view(), name="lookup-search"),
    path("weather", CurrentWeatherView.as_view(), name="lookup-weather"),
]
