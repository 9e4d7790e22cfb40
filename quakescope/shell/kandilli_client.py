"""Kandilli Live Client - Imperative Shell.

This module reads the latest Kandilli Observatory events from a public
JSON mirror. The endpoint only takes a result cap, capped at 100.
"""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable

from quakescope.core.config import KANDILLI_URL
from quakescope.core.event import Event, filter_by_magnitude, sort_by_magnitude
from quakescope.core.parsers import parse_kandilli_live
from quakescope.shell.http import DEFAULT_TIMEOUT, get_json


logger = logging.getLogger(__name__)


MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_limit(limit: int) -> int:
    """Clamp a requested result count into what the endpoint accepts."""
    return max(MIN_LIMIT, min(MAX_LIMIT, limit))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class KandilliClient:
    """Client for the Kandilli live feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = KANDILLI_URL,
        timeout: int = DEFAULT_TIMEOUT,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize Kandilli client.

        Args:
            base_url: Live feed endpoint
            timeout: Request timeout in seconds
            tz: Zone of the feed's wall-clock times (None = system zone)
            clock: Returns the current UTC time, used for unparseable dates
        """
        self.base_url = base_url
        self.timeout = timeout
        self.tz = tz
        self.clock = clock

    def fetch(
        self,
        window_hours: int = 24,
        min_magnitude: float = 0.0,
        limit: int = MAX_LIMIT,
    ) -> list[Event]:
        """Fetch the latest events.

        This method performs HTTP I/O. The feed has no time filter, so
        `window_hours` is not sent; the aggregator filters locally.

        Args:
            window_hours: Ignored by the endpoint
            min_magnitude: Keep events with magnitude >= this
            limit: Requested result count, clamped to [1, 100]

        Returns:
            Events sorted by magnitude, strongest first

        Raises:
            FeedError: NetworkError, ProtocolError or DecodeError
        """
        params = {"limit": str(clamp_limit(limit))}

        logger.info("Fetching earthquakes from Kandilli (limit=%s)", params["limit"])

        payload = get_json(self.base_url, params=params, timeout=self.timeout)
        events = parse_kandilli_live(payload, tz=self.tz, now=self.clock())
        events = filter_by_magnitude(events, min_magnitude)

        logger.info("Fetched %d earthquakes from Kandilli", len(events))
        return sort_by_magnitude(events)
