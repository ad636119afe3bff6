from __future__ import annotations

from datetime import datetime, timedelta, timezone


def offset_zone(offset_seconds: int) -> timezone:
    """Return a fixed-offset zone for an upstream `timezone` shift."""

    if not -86400 < offset_seconds < 86400:
        raise ValueError(f"Invalid UTC offset: {offset_seconds}")
    if offset_seconds == 0:
        return timezone.utc  # noqa: UP017
    return timezone(timedelta(seconds=offset_seconds))


def from_epoch(epoch: int, offset_seconds: int = 0) -> datetime:
    """Return the local datetime for a Unix timestamp at a UTC offset."""

    return datetime.fromtimestamp(epoch, tz=offset_zone(offset_seconds))

