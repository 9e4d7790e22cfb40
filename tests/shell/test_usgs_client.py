"""Tests for the USGS feed client.

Uses the `responses` library to mock HTTP requests.
"""

import pytest
import responses

from quakescope.core.errors import DecodeError, ProtocolError
from quakescope.shell.usgs_client import UsgsClient, UsgsFeed


BASE_URL = "https://usgs.example.com/summary"
DAY_URL = f"{BASE_URL}/all_day.geojson"
HOUR_URL = f"{BASE_URL}/all_hour.geojson"


def make_feature(event_id, magnitude, time_ms=1714557600000):
    return {
        "type": "Feature",
        "id": event_id,
        "properties": {"mag": magnitude, "place": f"Place {event_id}", "time": time_ms},
        "geometry": {"type": "Point", "coordinates": [35.0, 39.0, 10.0]},
    }


def make_feed(*features):
    return {"type": "FeatureCollection", "features": list(features)}


class TestUsgsFeed:
    """Tests for UsgsFeed.for_window()."""

    @pytest.mark.parametrize("hours,feed", [
        (1, UsgsFeed.LAST_HOUR),
        (3, UsgsFeed.LAST_DAY),
        (7, UsgsFeed.LAST_DAY),
        (24, UsgsFeed.LAST_DAY),
    ])
    def test_smallest_covering_feed(self, hours, feed):
        assert UsgsFeed.for_window(hours) is feed


class TestUsgsClientFetch:
    """Tests for UsgsClient.fetch()."""

    @responses.activate
    def test_one_hour_window_reads_hour_feed(self):
        responses.add(responses.GET, HOUR_URL, json=make_feed(), status=200)

        UsgsClient(base_url=BASE_URL).fetch(1)

        assert responses.calls[0].request.url == HOUR_URL

    @responses.activate
    def test_larger_window_reads_day_feed(self):
        responses.add(responses.GET, DAY_URL, json=make_feed(), status=200)

        UsgsClient(base_url=BASE_URL + "/").fetch(3)

        assert responses.calls[0].request.url == DAY_URL

    @responses.activate
    def test_sorted_by_magnitude_and_filtered(self):
        responses.add(
            responses.GET,
            DAY_URL,
            json=make_feed(
                make_feature("a", 2.1),
                make_feature("b", 4.5),
                make_feature("c", 3.0),
            ),
            status=200,
        )

        events = UsgsClient(base_url=BASE_URL).fetch(24, min_magnitude=2.5)

        assert [e.id for e in events] == ["b", "c"]

    @responses.activate
    def test_server_error_raises(self):
        responses.add(responses.GET, DAY_URL, status=502)

        with pytest.raises(ProtocolError):
            UsgsClient(base_url=BASE_URL).fetch(24)

    @responses.activate
    def test_wrong_shape_raises(self):
        responses.add(responses.GET, DAY_URL, json={"type": "FeatureCollection"}, status=200)

        with pytest.raises(DecodeError):
            UsgsClient(base_url=BASE_URL).fetch(24)
