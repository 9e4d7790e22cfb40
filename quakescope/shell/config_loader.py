"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, Location) are defined in quakescope/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakescope.core.config import Config, Location
from quakescope.core.sources import DataSource


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place (validate_config warns).
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_source(value: Any) -> DataSource:
    """Parse a provider name (case-insensitive)."""
    try:
        return DataSource(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(s.value for s in DataSource)
        raise ValueError(f"Unknown data source {value!r}, expected one of: {choices}") from e


def _parse_location(data: dict[str, Any]) -> Location:
    """Parse a location from config data."""
    return Location(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Raises:
        ValueError: If a value cannot be parsed
        KeyError: If a location is missing latitude or longitude
    """
    defaults = Config()

    location = None
    if data.get("location"):
        location = _parse_location(data["location"])

    webhook_url = _resolve_value(data.get("webhook_url")) or None

    return Config(
        poll_interval_seconds=int(data.get("poll_interval_seconds", defaults.poll_interval_seconds)),
        lookback_hours=int(data.get("lookback_hours", defaults.lookback_hours)),
        alert_source=_parse_source(data.get("alert_source", defaults.alert_source.value)),
        alert_fetch_limit=int(data.get("alert_fetch_limit", defaults.alert_fetch_limit)),
        request_timeout_seconds=int(
            data.get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
        user_agent=str(data.get("user_agent", defaults.user_agent)),
        usgs_feed_base_url=str(data.get("usgs_feed_base_url", defaults.usgs_feed_base_url)),
        afad_url=str(data.get("afad_url", defaults.afad_url)),
        kandilli_url=str(data.get("kandilli_url", defaults.kandilli_url)),
        state_path=str(_resolve_value(data.get("state_path", defaults.state_path))),
        webhook_url=webhook_url,
        location=location,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses QUAKESCOPE_CONFIG env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("QUAKESCOPE_CONFIG", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return load_config_from_env()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return load_config_from_env()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: alert source %s, poll every %ds, location %s",
        config.alert_source.value,
        config.poll_interval_seconds,
        "set" if config.location else "unset",
    )

    return config


def load_config_from_env() -> Config:
    """Load minimal configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        QUAKESCOPE_LATITUDE / QUAKESCOPE_LONGITUDE: Fixed user location
        QUAKESCOPE_WEBHOOK_URL: Webhook receiving notifications
        QUAKESCOPE_ALERT_SOURCE: usgs, afad or kandilli
        QUAKESCOPE_STATE_PATH: JSON state file location

    Returns:
        Config object from environment
    """
    data: dict[str, Any] = {}

    latitude = os.environ.get("QUAKESCOPE_LATITUDE")
    longitude = os.environ.get("QUAKESCOPE_LONGITUDE")
    if latitude and longitude:
        data["location"] = {"latitude": latitude, "longitude": longitude}
    elif latitude or longitude:
        logger.warning("Only one of QUAKESCOPE_LATITUDE/QUAKESCOPE_LONGITUDE set, ignoring")

    if os.environ.get("QUAKESCOPE_WEBHOOK_URL"):
        data["webhook_url"] = os.environ["QUAKESCOPE_WEBHOOK_URL"]

    if os.environ.get("QUAKESCOPE_ALERT_SOURCE"):
        data["alert_source"] = os.environ["QUAKESCOPE_ALERT_SOURCE"]

    if os.environ.get("QUAKESCOPE_STATE_PATH"):
        data["state_path"] = os.environ["QUAKESCOPE_STATE_PATH"]

    return load_config_from_dict(data)
