"""Provider payload decoding - Pure functions.

Turns each provider's decoded JSON into canonical Events. A payload whose
envelope does not match the provider schema raises DecodeError; a single
record with an unusable coordinate or (for AFAD) date is dropped.
"""

from datetime import datetime, timezone, tzinfo
from typing import Any

from quakescope.core.dates import parse_afad_date, parse_kandilli_date
from quakescope.core.errors import DecodeError
from quakescope.core.event import (
    Event,
    coerce_coordinate,
    coerce_depth,
    coerce_magnitude,
    resolve_place,
    synthetic_event_id,
)


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _epoch_ms_to_datetime(value: Any) -> datetime:
    """Convert USGS epoch milliseconds; missing or invalid maps to the epoch."""
    if value is None or isinstance(value, bool):
        return EPOCH
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return EPOCH


def _event_id(raw_id: Any, prefix: str, lat: float, lon: float,
              raw_time: Any, magnitude: float) -> str:
    if raw_id is not None and not isinstance(raw_id, bool) and str(raw_id).strip():
        return str(raw_id).strip()
    return synthetic_event_id(prefix, lat, lon, str(raw_time or ""), magnitude)


def parse_usgs_feature(feature: Any) -> Event | None:
    """Parse a single USGS GeoJSON feature into an Event.

    Args:
        feature: GeoJSON feature dict from a USGS summary feed

    Returns:
        Event, or None if the coordinate is unusable
    """
    if not isinstance(feature, dict):
        return None

    props = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    if not isinstance(props, dict) or not isinstance(geometry, dict):
        return None

    # USGS order is [lon, lat, depth]
    coords = geometry.get("coordinates")
    if not isinstance(coords, list) or len(coords) < 2:
        return None

    longitude = coerce_coordinate(coords[0])
    latitude = coerce_coordinate(coords[1])
    if latitude is None or longitude is None:
        return None

    magnitude = coerce_magnitude(props.get("mag"))
    url = props.get("url")

    return Event(
        id=_event_id(feature.get("id"), "usgs", latitude, longitude,
                     props.get("time"), magnitude),
        latitude=latitude,
        longitude=longitude,
        magnitude=magnitude,
        place=resolve_place(props.get("place"), latitude, longitude),
        time=_epoch_ms_to_datetime(props.get("time")),
        source_url=url if isinstance(url, str) and url else None,
        depth_km=coerce_depth(coords[2]) if len(coords) > 2 else None,
    )


def parse_usgs_feed(payload: Any) -> list[Event]:
    """Parse a USGS GeoJSON FeatureCollection.

    Raises:
        DecodeError: If the payload is not a FeatureCollection-shaped dict
    """
    if not isinstance(payload, dict):
        raise DecodeError("USGS payload is not a JSON object")

    features = payload.get("features")
    if not isinstance(features, list):
        raise DecodeError("USGS payload has no 'features' list")

    events = []
    for feature in features:
        event = parse_usgs_feature(feature)
        if event is not None:
            events.append(event)
    return events


def parse_afad_item(item: Any) -> Event | None:
    """Parse a single AFAD event record.

    AFAD sends numbers as strings. Records with an unparseable coordinate
    or date are dropped; a missing magnitude defaults to 0.

    Returns:
        Event, or None if the record is unusable
    """
    if not isinstance(item, dict):
        return None

    latitude = coerce_coordinate(item.get("latitude"))
    longitude = coerce_coordinate(item.get("longitude"))
    if latitude is None or longitude is None:
        return None

    event_time = parse_afad_date(item.get("date"))
    if event_time is None:
        return None

    magnitude = coerce_magnitude(item.get("magnitude"))

    return Event(
        id=_event_id(item.get("eventID"), "afad", latitude, longitude,
                     item.get("date"), magnitude),
        latitude=latitude,
        longitude=longitude,
        magnitude=magnitude,
        place=resolve_place(item.get("location"), latitude, longitude),
        time=event_time,
        depth_km=coerce_depth(item.get("depth")),
    )


def parse_afad_events(payload: Any) -> list[Event]:
    """Parse an AFAD event filter response (a JSON array).

    Raises:
        DecodeError: If the payload is not a list
    """
    if not isinstance(payload, list):
        raise DecodeError("AFAD payload is not a JSON array")

    events = []
    for item in payload:
        event = parse_afad_item(item)
        if event is not None:
            events.append(event)
    return events


def parse_kandilli_item(
    item: Any,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> Event | None:
    """Parse a single Kandilli live record.

    The coordinate comes from a GeoJSON point ([lon, lat]). An
    unparseable date falls back to `now` instead of dropping the record.

    Returns:
        Event, or None if the record has fewer than two coordinates
    """
    if not isinstance(item, dict):
        return None

    point = item.get("geojson")
    if not isinstance(point, dict):
        return None

    coords = point.get("coordinates")
    if not isinstance(coords, list) or len(coords) < 2:
        return None

    longitude = coerce_coordinate(coords[0])
    latitude = coerce_coordinate(coords[1])
    if latitude is None or longitude is None:
        return None

    raw_time = item.get("date_time")
    magnitude = coerce_magnitude(item.get("mag"))

    return Event(
        id=_event_id(item.get("earthquake_id"), "kandilli", latitude, longitude,
                     raw_time, magnitude),
        latitude=latitude,
        longitude=longitude,
        magnitude=magnitude,
        place=resolve_place(item.get("title"), latitude, longitude),
        time=parse_kandilli_date(raw_time, tz=tz, now=now),
        depth_km=coerce_depth(item.get("depth")),
    )


def parse_kandilli_live(
    payload: Any,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> list[Event]:
    """Parse a Kandilli live response ({"result": [...]}).

    Raises:
        DecodeError: If the envelope has no 'result' list
    """
    if not isinstance(payload, dict):
        raise DecodeError("Kandilli payload is not a JSON object")

    result = payload.get("result")
    if not isinstance(result, list):
        raise DecodeError("Kandilli payload has no 'result' list")

    if now is None:
        now = datetime.now(timezone.utc)

    events = []
    for item in result:
        event = parse_kandilli_item(item, tz=tz, now=now)
        if event is not None:
            events.append(event)
    return events
