"""Geographic calculations - Pure functions.

Great-circle distance between the user and an event epicenter.
All functions are pure with no side effects.
"""

import math

from quakescope.core.event import Event


# Mean Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push `a` a hair past 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_to_event(
    event: Event,
    latitude: float,
    longitude: float,
) -> float:
    """Distance in kilometers from a point to an event's epicenter.

    Pure function.
    """
    return calculate_distance(latitude, longitude, event.latitude, event.longitude)

