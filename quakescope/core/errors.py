"""Feed error taxonomy.

Every source adapter fails with exactly one of these. Callers that only
care that "the feed failed" catch FeedError.
"""


class FeedError(Exception):
    """Base class for source adapter failures."""


class NetworkError(FeedError):
    """Transport-level failure (DNS, connection refused, timeout)."""


class ProtocolError(FeedError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Unexpected HTTP status {status_code}")


class DecodeError(FeedError):
    """The response body does not match the provider's schema."""
