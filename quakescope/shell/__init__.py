"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS, AFAD and Kandilli clients (HTTP)
- Notification gateways (log, webhook)
- Local state file (settings, alerts flag)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakescope.shell.afad_client import AfadClient
from quakescope.shell.kandilli_client import KandilliClient
from quakescope.shell.usgs_client import UsgsClient
from quakescope.shell.settings_store import SettingsStore
from quakescope.shell.config_loader import load_config

__all__ = [
    "UsgsClient",
    "AfadClient",
    "KandilliClient",
    "SettingsStore",
    "load_config",
]
