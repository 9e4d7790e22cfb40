"""Notification Gateway - Imperative Shell.

Submits proximity alerts. Submission is fire-and-forget: the alert
monitor never waits for, or learns about, delivery.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import tzinfo
from typing import Protocol

import requests

from quakescope.core.event import Event
from quakescope.core.formatter import NotificationPayload, format_notification


logger = logging.getLogger(__name__)


# Default timeout for webhook requests (seconds)
DEFAULT_TIMEOUT = 10

# How many submitted identifiers a gateway remembers
MAX_REMEMBERED = 1000


class NotificationGateway(Protocol):
    """Where qualifying events are submitted."""

    async def request_authorization(self) -> bool:
        """Ask for permission to notify; False on refusal or failure."""
        ...

    def notify(self, event: Event, distance_km: float) -> None:
        """Submit a notification; never raises."""
        ...


class SubmittedIdentifiers:
    """Remembers recently submitted identifiers, oldest forgotten first."""

    def __init__(self, max_size: int = MAX_REMEMBERED) -> None:
        self.max_size = max_size
        self._ids: dict[str, None] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, identifier: str) -> None:
        self._ids[identifier] = None
        while len(self._ids) > self.max_size:
            del self._ids[next(iter(self._ids))]


class LogNotifier:
    """Gateway that writes notifications to the log.

    Used when no webhook is configured.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self.tz = tz
        self.submitted = SubmittedIdentifiers()

    async def request_authorization(self) -> bool:
        return True

    def notify(self, event: Event, distance_km: float) -> None:
        payload = format_notification(event, distance_km, tz=self.tz)
        if payload.identifier in self.submitted:
            logger.debug("Notification %s already submitted", payload.identifier)
            return

        self.submitted.add(payload.identifier)
        logger.warning("%s: %s", payload.title, payload.body)


@dataclass
class DeliveryResult:
    """Response from the webhook.

    Attributes:
        success: Whether the notification was accepted
        status_code: HTTP status code (0 if no response)
        error: Error message if failed
    """
    success: bool
    status_code: int
    error: str | None = None


class WebhookNotifier:
    """Gateway that POSTs notification payloads to a webhook.

    Requests run on a single background worker so notify() returns
    immediately.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: int = DEFAULT_TIMEOUT,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize webhook notifier.

        Args:
            webhook_url: Endpoint receiving JSON payloads
            timeout: Request timeout in seconds
            tz: Zone for the time of day in messages (None = system zone)
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.tz = tz
        self.submitted = SubmittedIdentifiers()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="quakescope-notify",
        )

    async def request_authorization(self) -> bool:
        """Authorized when a usable webhook URL is configured."""
        authorized = self.webhook_url.startswith(("http://", "https://"))
        if not authorized:
            logger.warning("Webhook URL %r is not usable, notifications disabled", self.webhook_url)
        return authorized

    def notify(self, event: Event, distance_km: float) -> None:
        payload = format_notification(event, distance_km, tz=self.tz)
        if payload.identifier in self.submitted:
            logger.debug("Notification %s already submitted", payload.identifier)
            return

        self.submitted.add(payload.identifier)
        future = self._executor.submit(self.send, payload)
        future.add_done_callback(self._log_send_failure)

    @staticmethod
    def _log_send_failure(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Webhook notification crashed", exc_info=exc)

    def send(self, payload: NotificationPayload) -> DeliveryResult:
        """POST one payload to the webhook.

        This method performs HTTP I/O.
        """
        logger.info("Sending notification %s to webhook", payload.identifier)

        try:
            response = requests.post(
                self.webhook_url,
                json=payload.to_dict(),
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        except requests.Timeout:
            logger.error("Webhook request timed out")
            return DeliveryResult(success=False, status_code=0, error="Request timed out")
        except requests.RequestException as e:
            logger.error("Webhook request failed: %s", str(e))
            return DeliveryResult(success=False, status_code=0, error=str(e))

        if 200 <= response.status_code < 300:
            logger.info("Notification %s delivered", payload.identifier)
            return DeliveryResult(success=True, status_code=response.status_code)

        logger.warning(
            "Webhook returned non-2xx: %d - %s",
            response.status_code,
            response.text,
        )
        return DeliveryResult(
            success=False,
            status_code=response.status_code,
            error=response.text,
        )

    def close(self) -> None:
        """Wait for queued notifications and stop the worker."""
        self._executor.shutdown(wait=True)
