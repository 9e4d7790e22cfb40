"""Command-line entry point.

Thin wrapper that loads configuration, wires shell components together
and runs the aggregator or the alert monitor.

Usage:
    quakescope events --source afad --hours 3
    quakescope monitor --lat 39.0 --lon 35.0
    quakescope settings --radius 200 --min-mag 4.0
    quakescope alerts on|off|status
"""

import argparse
import asyncio
import logging
import os
import sys

from quakescope.aggregator import EventAggregator
from quakescope.core.config import Config, Location, validate_config
from quakescope.core.formatter import format_event_summary
from quakescope.core.settings import AlertSettings
from quakescope.core.sources import DataSource, HoursWindow
from quakescope.monitor import AlertMonitor
from quakescope.shell.config_loader import load_config
from quakescope.shell.feeds import build_sources
from quakescope.shell.kv_store import JsonFileStore
from quakescope.shell.location import StaticLocationProvider
from quakescope.shell.notifier import LogNotifier, WebhookNotifier
from quakescope.shell.settings_store import SettingsStore


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _settings_store(config: Config) -> SettingsStore:
    return SettingsStore(JsonFileStore(config.state_path))


def run_events(config: Config, source: DataSource, window: HoursWindow) -> int:
    """Print the event list for a source and window."""
    aggregator = EventAggregator(build_sources(config))
    result = asyncio.run(aggregator.load(source, window))

    if result is None or not result.success:
        print(aggregator.error, file=sys.stderr)
        return 1

    print(f"{len(result.events)} earthquakes from {source.title} in the last {window.title}")
    for event in result.events:
        print(format_event_summary(event))
    return 0


async def _monitor_forever(
    config: Config,
    location: StaticLocationProvider,
    enable: bool = False,
) -> bool:
    """Run the monitor until cancelled.

    Returns:
        False without waiting if alerts are disabled and `enable` is not set
    """
    store = _settings_store(config)
    source = build_sources(config)[config.alert_source]

    if config.webhook_url:
        notifier = WebhookNotifier(config.webhook_url)
    else:
        notifier = LogNotifier()

    monitor = AlertMonitor(
        source=source,
        settings_store=store,
        location=location,
        notifier=notifier,
        config=config,
    )

    if enable:
        monitor.start()
    elif not monitor.restore():
        logger.warning("Alerts are disabled; run 'quakescope alerts on' or pass --enable")
        if isinstance(notifier, WebhookNotifier):
            notifier.close()
        return False

    if not await notifier.request_authorization():
        logger.warning("Notifications are not authorized; alerts will not be delivered")

    try:
        # Runs until the process is interrupted
        await asyncio.Event().wait()
    finally:
        monitor.stop(persist=False)
        if isinstance(notifier, WebhookNotifier):
            notifier.close()

    return True


def run_monitor(
    config: Config,
    latitude: float | None,
    longitude: float | None,
    enable: bool = False,
) -> int:
    """Run the alert monitor until interrupted.

    Only starts if alerts were left enabled, unless `enable` turns them on.
    Returns 1 when alerts are disabled.
    """
    if latitude is not None and longitude is not None:
        config.location = Location(latitude, longitude)
    elif config.location is not None:
        latitude, longitude = config.location.latitude, config.location.longitude

    result = validate_config(config)
    for error in result.errors:
        log = logger.error if error.severity == "error" else logger.warning
        log("Config %s: %s", error.field, error.message)
    if not result.valid:
        return 2

    try:
        location = StaticLocationProvider(latitude, longitude)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        started = asyncio.run(_monitor_forever(config, location, enable))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return 0
    return 0 if started else 1


def run_settings(config: Config, radius: float | None, min_magnitude: float | None) -> int:
    """Show, or update and show, the alert settings."""
    store = _settings_store(config)
    settings = store.load()

    if radius is not None or min_magnitude is not None:
        try:
            settings = AlertSettings(
                radius_km=settings.radius_km if radius is None else radius,
                min_magnitude=settings.min_magnitude if min_magnitude is None else min_magnitude,
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        store.save(settings)

    print(f"Radius: {settings.radius_km:.0f} km")
    print(f"Minimum magnitude: {settings.min_magnitude:.1f}")
    return 0


def run_alerts(config: Config, action: str) -> int:
    """Toggle or show the persisted alerts-enabled flag."""
    store = _settings_store(config)

    if action == "on":
        store.save_alerts_enabled(True)
    elif action == "off":
        store.save_alerts_enabled(False)

    print("Alerts: " + ("enabled" if store.load_alerts_enabled() else "disabled"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quakescope",
        description="Multi-source earthquake feed and proximity alerts",
    )
    parser.add_argument("--config", help="Path to YAML config (default: config/config.yaml)")
    sub = parser.add_subparsers(dest="command", required=True)

    events = sub.add_parser("events", help="List recent earthquakes")
    events.add_argument(
        "--source",
        choices=[s.value for s in DataSource],
        default=DataSource.USGS.value,
    )
    events.add_argument(
        "--hours",
        type=int,
        choices=[w.value for w in HoursWindow],
        default=HoursWindow.H24.value,
    )

    monitor = sub.add_parser("monitor", help="Run proximity alerts until interrupted")
    monitor.add_argument("--lat", type=float, help="Your latitude")
    monitor.add_argument("--lon", type=float, help="Your longitude")
    monitor.add_argument(
        "--enable",
        action="store_true",
        help="Turn alerts on (and keep them on) instead of honoring the saved choice",
    )

    settings = sub.add_parser("settings", help="Show or change alert thresholds")
    settings.add_argument("--radius", type=float, help="Alert radius in km (25-500)")
    settings.add_argument("--min-mag", type=float, help="Minimum magnitude (0-7)")

    alerts = sub.add_parser("alerts", help="Enable or disable alerts on next start")
    alerts.add_argument("action", choices=["on", "off", "status"])

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging()

    config = load_config(args.config)

    if args.command == "events":
        return run_events(config, DataSource(args.source), HoursWindow(args.hours))
    if args.command == "monitor":
        return run_monitor(config, args.lat, args.lon, args.enable)
    if args.command == "settings":
        return run_settings(config, args.radius, args.min_mag)
    return run_alerts(config, args.action)


if __name__ == "__main__":
    sys.exit(main())
