"""Proximity alert rule evaluation - Pure functions.

Decides which events are close and strong enough to notify about.
All functions are pure with no side effects.
"""

from dataclasses import dataclass

from quakescope.core.event import Event
from quakescope.core.geo import distance_to_event
from quakescope.core.settings import AlertSettings


@dataclass(frozen=True)
class AlertDecision:
    """Result of evaluating one event against the user's settings.

    Attributes:
        event: The event evaluated
        distance_km: Great-circle distance from the user
        qualifies: True if the user should be notified
    """
    event: Event
    distance_km: float
    qualifies: bool


def matches_magnitude(event: Event, settings: AlertSettings) -> bool:
    """Check the magnitude threshold (inclusive).

    Pure function.
    """
    return event.magnitude >= settings.min_magnitude


def matches_radius(distance_km: float, settings: AlertSettings) -> bool:
    """Check the distance threshold (inclusive).

    Pure function.
    """
    return distance_km <= settings.radius_km


def evaluate_event(
    event: Event,
    latitude: float,
    longitude: float,
    settings: AlertSettings,
) -> AlertDecision:
    """Evaluate an event for a user at (latitude, longitude).

    Pure function.

    Returns:
        AlertDecision carrying the computed distance
    """
    distance = distance_to_event(event, latitude, longitude)
    return AlertDecision(
        event=event,
        distance_km=distance,
        qualifies=matches_magnitude(event, settings) and matches_radius(distance, settings),
    )

