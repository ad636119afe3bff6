from __future__ import annotations

from prometheus_client import Counter, Histogram

lookup_provider_requests_total = Counter(
    "lookup_provider_requests_total",
    "Total geocoding/weather provider requests",
    labelnames=["provider", "endpoint"],
)

lookup_provider_errors_total = Counter(
    "lookup_provider_errors_total",
    "Total geocoding/weather provider request errors",
    labelnames=["provider", "endpoint", "error_type"],
)

lookup_provider_latency_seconds = Histogram(
    "lookup_provider_latency_seconds",
    "Latency of geocoding/weather provider requests",
    labelnames=["provider", "endpoint"],
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)

lookup_searches_total = Counter(
    "lookup_searches_total",
    "Autocomplete searches by outcome",
    labelnames=["outcome"],
)

lookup_resolutions_total = Counter(
    "lookup_resolutions_total",
    "Weather resolutions by outcome",
    labelnames=["outcome"],
)
