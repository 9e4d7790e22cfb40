"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Provider payload and timestamp parsing
- Geo/distance calculations
- Alert qualification
- Notification formatting
- Deduplication logic

All functions here are deterministic and have no I/O.
"""

from quakescope.core.event import Event
from quakescope.core.errors import DecodeError, FeedError, NetworkError, ProtocolError
from quakescope.core.geo import calculate_distance
from quakescope.core.rules import AlertDecision, evaluate_event
from quakescope.core.settings import AlertSettings
from quakescope.core.sources import DataSource, HoursWindow

__all__ = [
    # Event
    "Event",
    "DataSource",
    "HoursWindow",
    # Errors
    "FeedError",
    "NetworkError",
    "ProtocolError",
    "DecodeError",
    # Geo
    "calculate_distance",
    # Rules
    "AlertSettings",
    "AlertDecision",
    "evaluate_event",
]
