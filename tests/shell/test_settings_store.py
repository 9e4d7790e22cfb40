"""Tests for the settings store."""

from unittest.mock import Mock

import pytest

from quakescope.core.settings import AlertSettings
from quakescope.shell.kv_store import JsonFileStore
from quakescope.shell.settings_store import (
    ALERTS_ENABLED_KEY,
    SETTINGS_KEY,
    SettingsStore,
)


@pytest.fixture
def kv(tmp_path):
    return JsonFileStore(tmp_path / "state.json")


@pytest.fixture
def store(kv):
    return SettingsStore(kv)


class TestSettings:
    """Tests for SettingsStore.load() and save()."""

    def test_load_defaults_when_nothing_saved(self, store):
        assert store.load() == AlertSettings()

    def test_save_then_load(self, store):
        settings = AlertSettings(radius_km=300, min_magnitude=4.5)
        store.save(settings)
        assert store.load() == settings

    def test_save_is_idempotent(self, store, kv):
        settings = AlertSettings(radius_km=60, min_magnitude=1.0)
        store.save(settings)
        first = kv.get(SETTINGS_KEY)
        store.save(settings)

        assert kv.get(SETTINGS_KEY) == first
        assert store.load() == settings

    @pytest.mark.parametrize("raw", ["garbage", '{"radius_km": 9999}', 42])
    def test_invalid_stored_value_falls_back_to_defaults(self, store, kv, raw):
        kv.set(SETTINGS_KEY, raw)
        assert store.load() == AlertSettings()

    def test_save_failure_is_swallowed(self):
        kv = Mock()
        kv.set.side_effect = OSError("read-only file system")

        SettingsStore(kv).save(AlertSettings())

        kv.set.assert_called_once()


class TestAlertsEnabled:
    """Tests for the persisted alerts-enabled flag."""

    def test_false_when_never_set(self, store):
        assert store.load_alerts_enabled() is False

    def test_round_trip(self, store):
        store.save_alerts_enabled(True)
        assert store.load_alerts_enabled() is True
        store.save_alerts_enabled(False)
        assert store.load_alerts_enabled() is False

    def test_non_boolean_value_reads_false(self, store, kv):
        kv.set(ALERTS_ENABLED_KEY, "yes")
        assert store.load_alerts_enabled() is False

    def test_save_failure_is_swallowed(self):
        kv = Mock()
        kv.set.side_effect = OSError("disk full")

        SettingsStore(kv).save_alerts_enabled(True)
