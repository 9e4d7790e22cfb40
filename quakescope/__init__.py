"""QuakeScope - multi-source earthquake feeds and proximity alerts."""

__version__ = "1.0.0"
