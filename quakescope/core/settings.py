"""Alert settings model and codec - Pure functions.

The actual persistence is handled by the shell (settings store).
"""

import json
from dataclasses import asdict, dataclass


MIN_RADIUS_KM = 25.0
MAX_RADIUS_KM = 500.0
MIN_ALERT_MAGNITUDE = 0.0
MAX_ALERT_MAGNITUDE = 7.0

DEFAULT_RADIUS_KM = 150.0
DEFAULT_MIN_MAGNITUDE = 3.0


@dataclass(frozen=True)
class AlertSettings:
    """User-tunable proximity alert thresholds.

    Attributes:
        radius_km: Alert when the epicenter is at most this far away
        min_magnitude: Alert when magnitude is at least this (inclusive)

    Raises:
        ValueError: If a value is outside its allowed range
    """
    radius_km: float = DEFAULT_RADIUS_KM
    min_magnitude: float = DEFAULT_MIN_MAGNITUDE

    def __post_init__(self) -> None:
        if not MIN_RADIUS_KM <= self.radius_km <= MAX_RADIUS_KM:
            raise ValueError(
                f"radius_km {self.radius_km} out of range "
                f"[{MIN_RADIUS_KM:g}, {MAX_RADIUS_KM:g}]"
            )
        if not MIN_ALERT_MAGNITUDE <= self.min_magnitude <= MAX_ALERT_MAGNITUDE:
            raise ValueError(
                f"min_magnitude {self.min_magnitude} out of range "
                f"[{MIN_ALERT_MAGNITUDE:g}, {MAX_ALERT_MAGNITUDE:g}]"
            )


def encode_settings(settings: AlertSettings) -> str:
    """Encode settings as a JSON string.

    Pure function.
    """
    return json.dumps(asdict(settings), sort_keys=True)


def decode_settings(raw: str | bytes) -> AlertSettings:
    """Decode settings from a JSON string.

    Pure function. Keys absent from the document take their defaults.

    Raises:
        ValueError: If the document is malformed or a value is invalid
            (json.JSONDecodeError is a ValueError)
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("settings document is not a JSON object")

    try:
        return AlertSettings(
            radius_km=float(data.get("radius_km", DEFAULT_RADIUS_KM)),
            min_magnitude=float(data.get("min_magnitude", DEFAULT_MIN_MAGNITUDE)),
        )
    except TypeError as e:
        raise ValueError(f"settings value has the wrong type: {e}") from e
