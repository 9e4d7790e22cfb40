"""Data source and time window enums."""

from enum import Enum


class DataSource(str, Enum):
    """The upstream providers an event list can come from."""
    USGS = "usgs"
    AFAD = "afad"
    KANDILLI = "kandilli"

    @property
    def title(self) -> str:
        return {
            DataSource.USGS: "USGS",
            DataSource.AFAD: "AFAD",
            DataSource.KANDILLI: "Kandilli",
        }[self]


class HoursWindow(int, Enum):
    """Recency bound for the event list, in hours."""
    H1 = 1
    H3 = 3
    H7 = 7
    H24 = 24

    @property
    def title(self) -> str:
        return f"{self.value}h"
