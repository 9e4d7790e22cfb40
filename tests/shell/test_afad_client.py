"""Tests for the AFAD event client.

Uses the `responses` library to mock HTTP requests.
"""

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse

import pytest
import requests
import responses

from quakescope.core.errors import DecodeError, NetworkError
from quakescope.shell.afad_client import AfadClient


URL = "https://afad.example.com/apiv2/event/filter"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_item(event_id, date, magnitude="3.0"):
    return {
        "eventID": event_id,
        "location": f"Place {event_id}",
        "latitude": "39.0",
        "longitude": "35.0",
        "depth": "7.0",
        "magnitude": magnitude,
        "date": date,
    }


@pytest.fixture
def client():
    return AfadClient(base_url=URL, user_agent="QuakeScopeTest/1.0", clock=lambda: NOW)


def query_of(call):
    return {k: v[0] for k, v in parse_qs(urlparse(call.request.url).query).items()}


class TestAfadClientFetch:
    """Tests for AfadClient.fetch()."""

    @responses.activate
    def test_queries_exact_utc_window(self, client):
        responses.add(responses.GET, URL, json=[], status=200)

        client.fetch(3, limit=50)

        assert query_of(responses.calls[0]) == {
            "start": "2024-05-01 09:00:00",
            "end": "2024-05-01 12:00:00",
            "limit": "50",
            "orderby": "timedesc",
        }

    @responses.activate
    def test_sends_client_identifier(self, client):
        responses.add(responses.GET, URL, json=[], status=200)

        client.fetch(1)

        assert responses.calls[0].request.headers["User-Agent"] == "QuakeScopeTest/1.0"

    @responses.activate
    def test_newest_first_and_bad_dates_dropped(self, client):
        responses.add(
            responses.GET,
            URL,
            json=[
                make_item("old", "2024-05-01T09:30:00"),
                make_item("bad", "yesterday"),
                make_item("new", "2024-05-01T11:45:00"),
            ],
            status=200,
        )

        events = client.fetch(3)

        assert [e.id for e in events] == ["new", "old"]

    @responses.activate
    def test_min_magnitude_applied(self, client):
        responses.add(
            responses.GET,
            URL,
            json=[
                make_item("weak", "2024-05-01T10:00:00", magnitude="1.2"),
                make_item("strong", "2024-05-01T10:00:00", magnitude="4.0"),
            ],
            status=200,
        )

        assert [e.id for e in client.fetch(3, min_magnitude=2.0)] == ["strong"]

    @responses.activate
    def test_object_payload_raises(self, client):
        responses.add(responses.GET, URL, json={"error": "bad request"}, status=200)

        with pytest.raises(DecodeError):
            client.fetch(3)

    @responses.activate
    def test_connection_failure_raises(self, client):
        responses.add(responses.GET, URL, body=requests.ConnectionError("unreachable"))

        with pytest.raises(NetworkError):
            client.fetch(3)
