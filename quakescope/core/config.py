"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from quakescope.core.sources import DataSource


USGS_FEED_BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"
AFAD_URL = "https://deprem.afad.gov.tr/apiv2/event/filter"
KANDILLI_URL = "https://api.orhanaydogdu.com.tr/deprem/kandilli/live"

DEFAULT_USER_AGENT = "QuakeScope/1.0"
DEFAULT_STATE_PATH = "~/.quakescope/state.json"


@dataclass(frozen=True)
class Location:
    """A fixed user location.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
    """
    latitude: float
    longitude: float


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        poll_interval_seconds: Delay between alert monitor ticks
        lookback_hours: How far back each alert tick looks
        alert_source: Provider the alert monitor polls
        alert_fetch_limit: Result cap for alert fetches
        request_timeout_seconds: HTTP timeout for provider requests
        user_agent: User-Agent header sent to providers that require one
        usgs_feed_base_url: Base URL of the USGS summary feeds
        afad_url: AFAD event filter endpoint
        kandilli_url: Kandilli live endpoint
        state_path: JSON file holding settings and the alerts flag
        webhook_url: Where notifications are POSTed (None logs them)
        location: Fixed user location (None until one is known)
    """
    poll_interval_seconds: int = 600
    lookback_hours: int = 3
    alert_source: DataSource = DataSource.AFAD
    alert_fetch_limit: int = 300
    request_timeout_seconds: int = 30
    user_agent: str = DEFAULT_USER_AGENT
    usgs_feed_base_url: str = USGS_FEED_BASE_URL
    afad_url: str = AFAD_URL
    kandilli_url: str = KANDILLI_URL
    state_path: str = DEFAULT_STATE_PATH
    webhook_url: str | None = None
    location: Location | None = None


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.
    """
    errors: list[ValidationError] = []

    if config.poll_interval_seconds <= 0:
        errors.append(ValidationError(
            field="poll_interval_seconds",
            message=f"Poll interval must be positive, got {config.poll_interval_seconds}",
        ))

    if config.lookback_hours <= 0:
        errors.append(ValidationError(
            field="lookback_hours",
            message=f"Lookback must be positive, got {config.lookback_hours}",
        ))

    if config.alert_fetch_limit <= 0:
        errors.append(ValidationError(
            field="alert_fetch_limit",
            message=f"Fetch limit must be positive, got {config.alert_fetch_limit}",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if config.location is not None:
        errors.extend(validate_coordinates(
            config.location.latitude,
            config.location.longitude,
            "location",
        ))
    else:
        errors.append(ValidationError(
            field="location",
            message="No location configured; alert ticks will be skipped",
            severity="warning",
        ))

    if config.webhook_url and config.webhook_url.startswith("${"):
        errors.append(ValidationError(
            field="webhook_url",
            message="Webhook URL not resolved (still contains placeholder)",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
