"""Shared HTTP GET for source adapters - Imperative Shell.

Maps every way a provider request can fail onto the feed error taxonomy.
"""

import logging
from typing import Any

import requests

from quakescope.core.errors import DecodeError, NetworkError, ProtocolError


logger = logging.getLogger(__name__)


# Default timeout for provider requests (seconds)
DEFAULT_TIMEOUT = 30


def get_json(
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET a URL and decode its JSON body.

    This function performs HTTP I/O.

    Raises:
        NetworkError: On DNS, connection or timeout failures
        ProtocolError: On a non-2xx status
        DecodeError: If the body is not valid JSON
    """
    try:
        response = requests.get(
            url,
            params=params,
            headers=headers,
            timeout=timeout,
        )
    except requests.Timeout as e:
        raise NetworkError(f"Request to {url} timed out") from e
    except requests.RequestException as e:
        raise NetworkError(f"Request to {url} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        logger.warning(
            "Provider returned non-success status: %d - %s",
            response.status_code,
            url,
        )
        raise ProtocolError(
            response.status_code,
            f"{url} returned HTTP {response.status_code}",
        )

    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"{url} returned a body that is not JSON") from e
