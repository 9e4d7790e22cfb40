"""Source adapter registry - Imperative Shell.

All three provider clients satisfy the EventSource protocol; callers pick
one by DataSource instead of going through a class hierarchy.
"""

from typing import Protocol

from quakescope.core.config import Config
from quakescope.core.event import Event
from quakescope.core.sources import DataSource
from quakescope.shell.afad_client import AfadClient
from quakescope.shell.kandilli_client import KandilliClient
from quakescope.shell.usgs_client import UsgsClient


class EventSource(Protocol):
    """Capability shared by every source adapter.

    fetch() raises NetworkError, ProtocolError or DecodeError.
    """

    def fetch(
        self,
        window_hours: int,
        min_magnitude: float = 0.0,
        limit: int = 300,
    ) -> list[Event]:
        ...


def build_sources(config: Config) -> dict[DataSource, EventSource]:
    """Create one adapter per provider from configuration."""
    timeout = config.request_timeout_seconds
    return {
        DataSource.USGS: UsgsClient(
            base_url=config.usgs_feed_base_url,
            timeout=timeout,
        ),
        DataSource.AFAD: AfadClient(
            base_url=config.afad_url,
            timeout=timeout,
            user_agent=config.user_agent,
        ),
        DataSource.KANDILLI: KandilliClient(
            base_url=config.kandilli_url,
            timeout=timeout,
        ),
    }
