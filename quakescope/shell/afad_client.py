"""AFAD Event Client - Imperative Shell.

This module queries the AFAD (Turkish Disaster and Emergency Management
Authority) event filter API for a UTC time range.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from quakescope.core.config import AFAD_URL, DEFAULT_USER_AGENT
from quakescope.core.dates import format_afad_timestamp
from quakescope.core.event import Event, filter_by_magnitude, sort_by_time
from quakescope.core.parsers import parse_afad_events
from quakescope.shell.http import DEFAULT_TIMEOUT, get_json


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AfadClient:
    """Client for the AFAD event filter API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = AFAD_URL,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize AFAD client.

        Args:
            base_url: Event filter endpoint
            timeout: Request timeout in seconds
            user_agent: Client identifier sent with every request
            clock: Returns the current UTC time
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.clock = clock

    def _build_params(self, window_hours: int, limit: int) -> dict[str, str]:
        """Build query parameters covering the last `window_hours`."""
        end = self.clock()
        start = end - timedelta(hours=window_hours)
        return {
            "start": format_afad_timestamp(start),
            "end": format_afad_timestamp(end),
            "limit": str(limit),
            "orderby": "timedesc",
        }

    def fetch(
        self,
        window_hours: int = 24,
        min_magnitude: float = 0.0,
        limit: int = 300,
    ) -> list[Event]:
        """Fetch events from the last `window_hours`.

        This method performs HTTP I/O.

        Args:
            window_hours: How many hours back to query
            min_magnitude: Keep events with magnitude >= this
            limit: Maximum results requested from AFAD

        Returns:
            Events sorted by time, newest first

        Raises:
            FeedError: NetworkError, ProtocolError or DecodeError
        """
        params = self._build_params(window_hours, limit)
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

        logger.info(
            "Fetching earthquakes from AFAD",
            extra={"params": params},
        )

        payload = get_json(
            self.base_url,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )
        events = filter_by_magnitude(parse_afad_events(payload), min_magnitude)

        logger.info("Fetched %d earthquakes from AFAD", len(events))
        return sort_by_time(events)
