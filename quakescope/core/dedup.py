"""Deduplication logic.

Tracks which event ids the alert monitor has already examined so an
event is evaluated (and notified) at most once. The pure helpers decide
what is new and what can be forgotten; SeenEvents holds the state.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from quakescope.core.event import Event


def get_event_ids(events: list[Event]) -> set[str]:
    """Extract IDs from a list of events.

    Pure function.
    """
    return {e.id for e in events}


def filter_already_seen(
    events: list[Event],
    seen_ids: set[str],
) -> list[Event]:
    """Filter out events whose id has already been examined.

    Pure function. Duplicates within `events` are also collapsed to
    their first occurrence.
    """
    result = []
    emitted: set[str] = set()
    for event in events:
        if event.id in seen_ids or event.id in emitted:
            continue
        emitted.add(event.id)
        result.append(event)
    return result


def compute_ids_to_expire(
    first_seen: dict[str, datetime],
    current_ids: set[str],
    cutoff: datetime,
) -> set[str]:
    """Compute which remembered ids can be forgotten.

    Pure function.

    An id is only expired when it was first seen before `cutoff` and is
    no longer present in the provider's current data; otherwise the next
    poll would treat it as new.

    Args:
        first_seen: Remembered ids mapped to when they were first examined
        current_ids: Ids returned by the latest successful fetch
        cutoff: Ids first seen before this instant are candidates

    Returns:
        Set of ids to forget
    """
    return {
        event_id for event_id, seen_at in first_seen.items()
        if seen_at < cutoff and event_id not in current_ids
    }


@dataclass
class SeenEvents:
    """Bounded set of examined event ids.

    Attributes:
        retention: How long an id is kept after it leaves the feed
    """
    retention: timedelta
    _first_seen: dict[str, datetime] = field(default_factory=dict)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._first_seen

    def __len__(self) -> int:
        return len(self._first_seen)

    def ids(self) -> set[str]:
        return set(self._first_seen)

    def add(self, event_id: str, now: datetime) -> None:
        self._first_seen.setdefault(event_id, now)

    def expire(self, current_ids: set[str], now: datetime) -> set[str]:
        """Forget ids that aged out; returns the ids removed."""
        expired = compute_ids_to_expire(
            self._first_seen, current_ids, now - self.retention,
        )
        for event_id in expired:
            del self._first_seen[event_id]
        return expired
