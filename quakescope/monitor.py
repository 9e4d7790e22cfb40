"""Alert Monitor - Background proximity alerting.

Polls one provider on a fixed period and notifies the user about events
that are strong enough and close enough, at most once per event.

States: inactive (initial) and active. start()/stop() switch between
them and optionally persist the choice so restore() can resume after a
restart. A failed tick never changes state; the next tick is the retry.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from quakescope.core.config import Config
from quakescope.core.dedup import SeenEvents, filter_already_seen, get_event_ids
from quakescope.core.errors import FeedError
from quakescope.core.event import filter_by_time
from quakescope.core.rules import AlertDecision, evaluate_event
from quakescope.shell.feeds import EventSource
from quakescope.shell.location import LocationProvider
from quakescope.shell.notifier import NotificationGateway
from quakescope.shell.settings_store import SettingsStore


logger = logging.getLogger(__name__)


# Alert fetches never filter by magnitude upstream; settings apply locally
FETCH_MIN_MAGNITUDE = 0.0

# call_later(delay_seconds, callback) -> handle with cancel()
Scheduler = Callable[[float, Callable[[], None]], Any]


@dataclass
class TickResult:
    """What one tick did.

    Attributes:
        skipped: Why nothing was fetched (None if a fetch happened)
        events_fetched: Events returned by the provider within the window
        events_examined: Events not seen in an earlier tick
        notified: Decisions for events that were submitted
        error: Provider failure message, if the fetch failed
    """
    skipped: str | None = None
    events_fetched: int = 0
    events_examined: int = 0
    notified: list[AlertDecision] = field(default_factory=list)
    error: str | None = None

    @property
    def summary(self) -> str:
        """Human-readable summary of the tick."""
        if self.skipped:
            return f"Skipped: {self.skipped}"
        if self.error:
            return f"Fetch failed: {self.error}"
        return (
            f"Fetched {self.events_fetched} events, "
            f"{self.events_examined} new, "
            f"{len(self.notified)} notified"
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class AlertMonitor:
    """Coordinates periodic proximity alerting.

    This class wires together:
    - an event source (the alerting provider)
    - the settings store (thresholds and the persisted enabled flag)
    - a location provider (the user's coordinate)
    - a notification gateway (where qualifying events go)
    """

    def __init__(
        self,
        source: EventSource,
        settings_store: SettingsStore,
        location: LocationProvider,
        notifier: NotificationGateway,
        config: Config | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize monitor.

        Args:
            source: Adapter polled on every tick
            settings_store: Alert settings and enabled-flag persistence
            location: Provider of the user's coordinate
            notifier: Gateway receiving qualifying events
            config: Poll interval, lookback and fetch limit
            scheduler: call_later-style timer; defaults to the running
                event loop, so start() must then be called inside it
            clock: Returns the current UTC time
        """
        self.source = source
        self.settings_store = settings_store
        self.location = location
        self.notifier = notifier
        self.config = config or Config()
        self.scheduler = scheduler or _loop_scheduler
        self.clock = clock

        # An id leaves the set once it is gone from the feed for a full
        # lookback window plus one poll.
        self.seen = SeenEvents(
            retention=timedelta(
                hours=self.config.lookback_hours,
                seconds=self.config.poll_interval_seconds,
            ),
        )

        self._active = False
        # Bumped on every start so a tick from before a stop/start cycle
        # cannot re-arm the timer of the new run
        self._generation = 0
        self._timer: Any = None
        self._tick_task: asyncio.Task | None = None

    @property
    def is_active(self) -> bool:
        return self._active

    def restore(self) -> bool:
        """Resume alerting if it was enabled when the process last ran.

        Reads the persisted flag once and starts without rewriting it.

        Returns:
            True if the monitor was started
        """
        if self._active or not self.settings_store.load_alerts_enabled():
            return False

        logger.info("Restoring alert monitor from saved state")
        self.start(persist=False)
        return True

    def start(self, persist: bool = True) -> None:
        """Activate the monitor and run the first tick immediately."""
        if self._active:
            return

        self._active = True
        self._generation += 1
        if persist:
            self.settings_store.save_alerts_enabled(True)

        self.location.start_updates()
        logger.info(
            "Alert monitor started (every %ds)",
            self.config.poll_interval_seconds,
        )
        self._arm(0)

    def stop(self, persist: bool = True) -> None:
        """Deactivate the monitor and cancel any pending or running tick."""
        if not self._active:
            return

        self._active = False
        if persist:
            self.settings_store.save_alerts_enabled(False)

        self.location.stop_updates()

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._tick_task is not None and not self._tick_task.done():
            self._tick_task.cancel()
        self._tick_task = None

        logger.info("Alert monitor stopped")

    def _arm(self, delay: float) -> None:
        """Schedule the next tick; at most one is ever pending."""
        if not self._active:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self.scheduler(delay, self._launch_tick)

    def _launch_tick(self) -> None:
        self._timer = None
        self._tick_task = asyncio.ensure_future(self.tick())
        self._tick_task.add_done_callback(self._log_tick_failure)

    @staticmethod
    def _log_tick_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Alert tick crashed", exc_info=exc)

    async def tick(self) -> TickResult:
        """Run one alert check.

        The next tick is armed on every exit path, including early
        returns and errors, as long as the monitor is still active.
        """
        generation = self._generation
        try:
            result = await self._check()
        finally:
            if generation == self._generation:
                self._arm(self.config.poll_interval_seconds)

        logger.info("Alert tick: %s", result.summary)
        return result

    async def _check(self) -> TickResult:
        if not self._active:
            return TickResult(skipped="monitor inactive")

        coordinate = self.location.current()
        if coordinate is None:
            logger.debug("No location available, skipping alert tick")
            return TickResult(skipped="no location")

        latitude, longitude = coordinate
        settings = self.settings_store.load()
        lookback = self.config.lookback_hours

        try:
            events = await asyncio.to_thread(
                self.source.fetch,
                lookback,
                FETCH_MIN_MAGNITUDE,
                self.config.alert_fetch_limit,
            )
        except FeedError as e:
            logger.error("Alert tick fetch failed: %s", e)
            return TickResult(error=str(e))

        now = self.clock()
        events = filter_by_time(events, now - timedelta(hours=lookback))
        expired = self.seen.expire(get_event_ids(events), now)
        if expired:
            logger.debug("Forgot %d expired event ids", len(expired))

        new_events = filter_already_seen(events, self.seen.ids())
        notified = []

        for event in new_events:
            decision = evaluate_event(event, latitude, longitude, settings)
            # Marked even when not qualifying: a settings change later
            # must not resurrect an event already examined
            self.seen.add(event.id, now)

            if decision.qualifies:
                logger.info(
                    "Notifying M%.1f %s (%.0f km away)",
                    event.magnitude,
                    event.place,
                    decision.distance_km,
                )
                self.notifier.notify(event, decision.distance_km)
                notified.append(decision)

        return TickResult(
            events_fetched=len(events),
            events_examined=len(new_events),
            notified=notified,
        )
