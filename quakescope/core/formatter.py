"""Message formatting - Pure functions.

Formats events into notification payloads and list lines.
All functions are pure with no side effects (given an explicit tz).
"""

from dataclasses import asdict, dataclass
from datetime import datetime, tzinfo
from typing import Any

from quakescope.core.event import Event


DEFAULT_SOUND = "default"


@dataclass(frozen=True)
class NotificationPayload:
    """What gets submitted to the notification gateway.

    Attributes:
        identifier: Derived from the event id; resubmission with the same
            identifier is recognized as a duplicate by the gateway
        title: Headline containing the magnitude
        body: Place, rounded distance and local time of day
        sound: Sound indicator
    """
    identifier: str
    title: str
    body: str
    sound: str = DEFAULT_SOUND

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def notification_identifier(event: Event) -> str:
    """Pure function."""
    return f"eq-{event.id}"


def local_time(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert to `tz`, or to the system zone when tz is None."""
    return moment.astimezone(tz)


def get_severity_label(magnitude: float) -> str:
    """Get a human-readable severity label.

    Pure function.
    """
    if magnitude >= 8.0:
        return "Great"
    elif magnitude >= 7.0:
        return "Major"
    elif magnitude >= 6.0:
        return "Strong"
    elif magnitude >= 5.0:
        return "Moderate"
    elif magnitude >= 4.0:
        return "Light"
    elif magnitude >= 3.0:
        return "Minor"
    else:
        return "Micro"


def format_notification(
    event: Event,
    distance_km: float,
    tz: tzinfo | None = None,
) -> NotificationPayload:
    """Format a proximity alert for an event.

    Args:
        event: The qualifying event
        distance_km: Distance from the user
        tz: Zone for the time of day; None means the system zone

    Returns:
        NotificationPayload
    """
    time_str = local_time(event.time, tz).strftime("%H:%M")
    return NotificationPayload(
        identifier=notification_identifier(event),
        title=f"Earthquake nearby (M{event.magnitude:.1f})",
        body=f"{event.place} - {distance_km:.0f} km away • {time_str}",
    )


def format_event_summary(event: Event, tz: tzinfo | None = None) -> str:
    """Format a one-line summary of an event.

    Args:
        event: Event to summarize
        tz: Zone for the timestamp; None means the system zone

    Returns:
        One-line summary string
    """
    time_str = local_time(event.time, tz).strftime("%Y-%m-%d %H:%M:%S %Z")
    line = (
        f"M{event.magnitude:.1f} {get_severity_label(event.magnitude):<8} "
        f"{event.place} at {time_str}"
    )
    if event.depth_km is not None:
        line += f" (depth: {event.depth_km:.1f}km)"
    return line
