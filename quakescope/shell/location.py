"""Device location - Imperative Shell.

The alert monitor only consumes the resulting coordinate; how it is
obtained (permission prompts, GPS) is outside this package.
"""

import logging
from typing import Protocol


logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Source of the user's current coordinate."""

    def start_updates(self) -> None:
        ...

    def stop_updates(self) -> None:
        ...

    def current(self) -> tuple[float, float] | None:
        """Latest (latitude, longitude), or None if unknown."""
        ...


class StaticLocationProvider:
    """A fixed coordinate, available only while updates are running."""

    def __init__(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> None:
        if (latitude is None) != (longitude is None):
            raise ValueError("latitude and longitude must be given together")
        self._coordinate = None if latitude is None else (latitude, longitude)
        self._updating = False

    @property
    def is_updating(self) -> bool:
        return self._updating

    def start_updates(self) -> None:
        self._updating = True
        logger.debug("Location updates started")

    def stop_updates(self) -> None:
        self._updating = False
        logger.debug("Location updates stopped")

    def current(self) -> tuple[float, float] | None:
        if not self._updating:
            return None
        return self._coordinate
