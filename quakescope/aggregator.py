"""Aggregator - one uniform event list over three providers.

Picks the adapter for the requested source, applies the time window the
provider cannot apply itself, and always returns events newest first.
Holds the view state (events, error, loading flag) of the event list.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from quakescope.core.errors import FeedError
from quakescope.core.event import Event, filter_by_time, sort_by_time
from quakescope.core.sources import DataSource, HoursWindow
from quakescope.shell.feeds import EventSource


logger = logging.getLogger(__name__)


# Result cap requested from providers that take one
DEFAULT_FETCH_LIMIT = 300

# Providers whose adapter already restricts results to the exact window
NATIVE_WINDOW_SOURCES = frozenset({DataSource.AFAD})


@dataclass
class LoadResult:
    """Outcome of one aggregator load.

    Attributes:
        source: Provider that was queried
        window: Recency bound that was applied
        events: Events, newest first (empty on error)
        error: User-facing message if the provider failed
    """
    source: DataSource
    window: HoursWindow
    events: list[Event] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_load_error(cause: Exception) -> str:
    """Wrap an adapter failure into the message shown to the user."""
    return f"Could not load earthquake data. {cause}"


class EventAggregator:
    """Loads the event list for a (source, window) selection.

    A new load cancels the one in flight, so a slow superseded request
    can never overwrite the state of a newer one.
    """

    def __init__(
        self,
        sources: dict[DataSource, EventSource],
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize aggregator.

        Args:
            sources: One adapter per provider
            fetch_limit: Result cap passed to the adapters
            clock: Returns the current UTC time
        """
        self.sources = sources
        self.fetch_limit = fetch_limit
        self.clock = clock

        self.events: list[Event] = []
        self.error: str | None = None
        self.is_loading = False
        self._task: asyncio.Task | None = None

    async def _fetch(self, source: DataSource, window: HoursWindow) -> list[Event]:
        """Fetch from the adapter and apply the local window filter."""
        adapter = self.sources[source]

        # Adapters block on requests; keep the event loop free
        events = await asyncio.to_thread(
            adapter.fetch, int(window), 0.0, self.fetch_limit,
        )

        if source not in NATIVE_WINDOW_SOURCES:
            cutoff = self.clock() - timedelta(hours=int(window))
            events = filter_by_time(events, cutoff)

        return sort_by_time(events)

    async def _load(self, source: DataSource, window: HoursWindow) -> LoadResult:
        self.is_loading = True
        try:
            events = await self._fetch(source, window)
        except FeedError as e:
            logger.error("Failed to load %s events: %s", source.title, e)
            self.events = []
            self.error = format_load_error(e)
            return LoadResult(source=source, window=window, error=self.error)
        finally:
            if asyncio.current_task() is self._task:
                self.is_loading = False

        logger.info(
            "Loaded %d %s events for the last %dh",
            len(events),
            source.title,
            int(window),
        )
        self.events = events
        self.error = None
        return LoadResult(source=source, window=window, events=events)

    async def load(
        self,
        source: DataSource,
        window: HoursWindow,
    ) -> LoadResult | None:
        """Load events for a source and window.

        Cancels any load still in flight.

        Returns:
            LoadResult of this request, or None if a newer load
            superseded it before it finished
        """
        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded load")
            self._task.cancel()

        task = asyncio.ensure_future(self._load(source, window))
        self._task = task

        try:
            return await task
        except asyncio.CancelledError:
            if task is not self._task:
                return None
            raise
