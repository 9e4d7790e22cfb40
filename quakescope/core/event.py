"""Canonical earthquake event model - Pure functions.

Every source adapter maps its provider schema onto the Event defined here.
All functions are pure with no side effects.
"""

import hashlib
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Event:
    """Immutable earthquake event, normalized across providers.

    Attributes:
        id: Provider-scoped event identifier
        latitude: Epicenter latitude (WGS-84 degrees, not range checked)
        longitude: Epicenter longitude (WGS-84 degrees, not range checked)
        magnitude: Event magnitude, never negative
        place: Human-readable location description
        time: Event timestamp (UTC)
        source_url: Provider deep link, if the provider supplies one
        depth_km: Depth in kilometers, if reported
    """
    id: str
    latitude: float
    longitude: float
    magnitude: float
    place: str
    time: datetime
    source_url: str | None = None
    depth_km: float | None = None

    @property
    def coordinate(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def coerce_coordinate(value: Any) -> float | None:
    """Convert a raw latitude/longitude value to float.

    Pure function. Accepts numbers and numeric strings.

    Returns:
        The float value, or None if the value is missing, non-numeric
        or not finite
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        result = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(result):
        return None
    return result


def coerce_magnitude(value: Any) -> float:
    """Convert a raw magnitude to a non-negative float.

    Pure function. Missing or unparseable magnitudes default to 0.0,
    negative magnitudes are clamped to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(result) or result < 0:
        return 0.0
    return result


def coerce_depth(value: Any) -> float | None:
    """Convert a raw depth to float, None if absent or unparseable."""
    return coerce_coordinate(value)


def describe_coordinate(latitude: float, longitude: float) -> str:
    """Build a place label for events whose provider gave none."""
    return f"Lat {latitude:.2f}, Lon {longitude:.2f}"


def resolve_place(place: Any, latitude: float, longitude: float) -> str:
    """Return the trimmed provider label, or a coordinate label if empty."""
    if isinstance(place, str):
        label = place.strip()
        if label:
            return label
    return describe_coordinate(latitude, longitude)


def synthetic_event_id(
    prefix: str,
    latitude: float,
    longitude: float,
    raw_time: Any,
    magnitude: float,
) -> str:
    """Derive a stable identifier for an event the provider left unnamed.

    Pure function. The same upstream record always hashes to the same id.
    The raw time string is hashed, never the parsed time, which may be a
    "now" fallback.
    """
    key = f"{latitude:.4f},{longitude:.4f},{raw_time},{magnitude:.1f}"
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:16]
    return f"{prefix}-{digest}"


def filter_by_magnitude(
    events: list[Event],
    min_magnitude: float | None = None,
) -> list[Event]:
    """Keep events with magnitude >= min_magnitude.

    Pure function.
    """
    if min_magnitude is None:
        return events
    return [e for e in events if e.magnitude >= min_magnitude]


def filter_by_time(events: list[Event], since: datetime) -> list[Event]:
    """Keep events that happened at or after `since`.

    Pure function.
    """
    return [e for e in events if e.time >= since]


def sort_by_time(events: list[Event]) -> list[Event]:
    """Sort newest first, ties broken by id so the order is total.

    Pure function.
    """
    return sorted(events, key=lambda e: (e.time, e.id), reverse=True)


def sort_by_magnitude(events: list[Event]) -> list[Event]:
    """Sort strongest first.

    Pure function.
    """
    return sorted(events, key=lambda e: e.magnitude, reverse=True)
