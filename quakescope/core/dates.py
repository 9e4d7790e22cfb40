"""Provider timestamp parsing - Pure functions.

Each provider formats timestamps its own way. A parser tries an ordered
list of candidate formats and returns the first successful result.
All results are timezone-aware UTC datetimes.
"""

import re
from datetime import datetime, timezone, tzinfo


# AFAD reports UTC wall-clock time, with or without the ISO 'T' separator
AFAD_NAIVE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

# Kandilli reports Turkish local wall-clock time
KANDILLI_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y.%m.%d %H:%M:%S",
)

AFAD_QUERY_FORMAT = "%Y-%m-%d %H:%M:%S"

_INTERNET_DATE_TIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_naive(text: str, fmt: str) -> datetime | None:
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        return None


def parse_internet_date_time(
    text: str,
    fractional_seconds: bool,
) -> datetime | None:
    """Parse an RFC 3339 internet date-time.

    Pure function.

    Args:
        text: Timestamp string, e.g. "2024-05-01T10:15:30.250Z"
        fractional_seconds: If True, require a fractional part;
            if False, reject one

    Returns:
        UTC datetime, or None if the text does not match
    """
    # fromisoformat also takes forms RFC 3339 forbids (no offset, no seconds)
    match = _INTERNET_DATE_TIME.match(text)
    if match is None:
        return None

    if fractional_seconds != (match.group(1) is not None):
        return None

    # Fractions past microseconds are truncated by fromisoformat
    try:
        parsed = datetime.fromisoformat(text.upper())
    except ValueError:
        return None

    return parsed.astimezone(timezone.utc)


def parse_afad_date(text: str | None) -> datetime | None:
    """Parse an AFAD event date.

    Pure function. Candidates, in order:
    1. yyyy-MM-dd'T'HH:mm:ss (UTC)
    2. yyyy-MM-dd HH:mm:ss (UTC)
    3. internet date-time with fractional seconds
    4. internet date-time without fractional seconds

    Returns:
        UTC datetime, or None if every candidate fails
    """
    if not isinstance(text, str):
        return None

    text = text.strip()

    for fmt in AFAD_NAIVE_FORMATS:
        parsed = _parse_naive(text, fmt)
        if parsed is not None:
            return parsed.replace(tzinfo=timezone.utc)

    for fractional in (True, False):
        parsed = parse_internet_date_time(text, fractional_seconds=fractional)
        if parsed is not None:
            return parsed

    return None


def parse_kandilli_date(
    text: str | None,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> datetime:
    """Parse a Kandilli event date.

    Pure function (given `tz` and `now`). Candidates, in order:
    1. yyyy-MM-dd HH:mm:ss
    2. yyyy.MM.dd HH:mm:ss
    Both are local wall-clock times.

    Args:
        text: Timestamp string
        tz: Zone the wall-clock time is in; None means the system zone
        now: Fallback instant; None means the current time

    Returns:
        UTC datetime. Falls back to `now` when every candidate fails.
    """
    if isinstance(text, str):
        text = text.strip()
        for fmt in KANDILLI_FORMATS:
            parsed = _parse_naive(text, fmt)
            if parsed is None:
                continue
            if tz is None:
                # naive astimezone() assumes system local time
                return parsed.astimezone(timezone.utc)
            return parsed.replace(tzinfo=tz).astimezone(timezone.utc)

    if now is None:
        now = datetime.now(timezone.utc)
    return now


def format_afad_timestamp(moment: datetime) -> str:
    """Format an instant as an AFAD query parameter (UTC)."""
    return moment.astimezone(timezone.utc).strftime(AFAD_QUERY_FORMAT)
