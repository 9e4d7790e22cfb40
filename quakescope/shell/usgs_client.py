"""USGS Feed Client - Imperative Shell.

This module fetches the USGS GeoJSON summary feeds. The feeds are fixed
files with no query parameters, so only two window granularities exist
upstream; finer windows are filtered locally by the aggregator.
"""

import logging
from enum import Enum

from quakescope.core.config import USGS_FEED_BASE_URL
from quakescope.core.event import Event, filter_by_magnitude, sort_by_magnitude
from quakescope.core.parsers import parse_usgs_feed
from quakescope.shell.http import DEFAULT_TIMEOUT, get_json


logger = logging.getLogger(__name__)


class UsgsFeed(str, Enum):
    """Natively supported USGS summary feeds."""
    LAST_HOUR = "all_hour"
    LAST_DAY = "all_day"

    @classmethod
    def for_window(cls, window_hours: int) -> "UsgsFeed":
        """Pick the smallest native feed that covers the window."""
        return cls.LAST_HOUR if window_hours <= 1 else cls.LAST_DAY


class UsgsClient:
    """Client for the USGS summary feeds.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_FEED_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: Directory holding the summary feed files
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def feed_url(self, feed: UsgsFeed) -> str:
        return f"{self.base_url}/{feed.value}.geojson"

    def fetch_feed(
        self,
        feed: UsgsFeed = UsgsFeed.LAST_DAY,
        min_magnitude: float = 0.0,
    ) -> list[Event]:
        """Fetch one summary feed.

        This method performs HTTP I/O.

        Args:
            feed: Which summary feed to read
            min_magnitude: Keep events with magnitude >= this

        Returns:
            Events sorted by magnitude, strongest first

        Raises:
            FeedError: NetworkError, ProtocolError or DecodeError
        """
        url = self.feed_url(feed)
        logger.info("Fetching USGS feed %s", feed.value)

        payload = get_json(url, timeout=self.timeout)
        events = filter_by_magnitude(parse_usgs_feed(payload), min_magnitude)

        logger.info("Fetched %d earthquakes from USGS", len(events))
        return sort_by_magnitude(events)

    def fetch(
        self,
        window_hours: int,
        min_magnitude: float = 0.0,
        limit: int = 300,
    ) -> list[Event]:
        """Fetch the native feed covering `window_hours`.

        The window only selects the feed and `limit` is ignored; the
        summary feeds take no parameters.
        """
        return self.fetch_feed(UsgsFeed.for_window(window_hours), min_magnitude)
