"""Settings Store - Imperative Shell.

Persists the user's alert thresholds and the alerts-enabled flag.
Neither operation ever raises to the caller: loads fall back to
defaults and failed saves are logged and dropped.
"""

import logging

from quakescope.core.settings import AlertSettings, decode_settings, encode_settings
from quakescope.shell.kv_store import JsonFileStore


logger = logging.getLogger(__name__)


SETTINGS_KEY = "alert_settings"
ALERTS_ENABLED_KEY = "alerts_enabled"


class SettingsStore:
    """Loads and saves AlertSettings and the alerts-enabled flag."""

    def __init__(self, store: JsonFileStore) -> None:
        self.store = store

    def load(self) -> AlertSettings:
        """Load saved settings, or defaults if none are usable."""
        raw = self.store.get(SETTINGS_KEY)
        if raw is None:
            return AlertSettings()

        try:
            return decode_settings(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Stored alert settings are invalid, using defaults: %s", e)
            return AlertSettings()

    def save(self, settings: AlertSettings) -> None:
        """Save settings. Failures are logged, not raised."""
        try:
            self.store.set(SETTINGS_KEY, encode_settings(settings))
        except (TypeError, ValueError, OSError) as e:
            logger.warning("Failed to save alert settings: %s", e)
            return

        logger.info(
            "Saved alert settings: radius %.0f km, min magnitude %.1f",
            settings.radius_km,
            settings.min_magnitude,
        )

    def load_alerts_enabled(self) -> bool:
        """Whether alerts were left enabled; False if never set."""
        return self.store.get(ALERTS_ENABLED_KEY) is True

    def save_alerts_enabled(self, enabled: bool) -> None:
        """Persist the alerts-enabled flag. Failures are logged, not raised."""
        try:
            self.store.set(ALERTS_ENABLED_KEY, bool(enabled))
        except OSError as e:
            logger.warning("Failed to save alerts-enabled flag: %s", e)
