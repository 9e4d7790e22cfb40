"""Unit tests for provider payload decoding.

Pure function tests - no mocks needed.
"""

from datetime import datetime, timedelta, timezone

import pytest

from quakescope.core.errors import DecodeError
from quakescope.core.parsers import (
    EPOCH,
    parse_afad_events,
    parse_afad_item,
    parse_kandilli_item,
    parse_kandilli_live,
    parse_usgs_feature,
    parse_usgs_feed,
)


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
ISTANBUL = timezone(timedelta(hours=3))


# Sample USGS GeoJSON feature for testing
SAMPLE_USGS_FEATURE = {
    "type": "Feature",
    "id": "nc75095866",
    "properties": {
        "mag": 4.2,
        "place": "10km NE of San Francisco, CA",
        "time": 1703001600000,  # 2023-12-19 16:00:00 UTC
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
    },
    "geometry": {
        "type": "Point",
        "coordinates": [-122.4194, 37.7749, 10.5],  # lon, lat, depth
    },
}

SAMPLE_AFAD_ITEM = {
    "eventID": "612345",
    "location": "Sindirgi (Balikesir)",
    "latitude": "39.2085",
    "longitude": "28.1635",
    "depth": "7.03",
    "magnitude": "3.4",
    "date": "2024-05-01T10:15:30",
}

SAMPLE_KANDILLI_ITEM = {
    "earthquake_id": "kEw1a2b3",
    "title": "AKHISAR (MANISA)",
    "mag": 2.8,
    "depth": 5.1,
    "date_time": "2024-05-01 13:15:30",
    "geojson": {"type": "Point", "coordinates": [27.84, 38.92]},
}


class TestParseUsgsFeature:
    """Tests for parse_usgs_feature()."""

    def test_parses_valid_feature(self):
        """Should parse a valid GeoJSON feature into an Event."""
        result = parse_usgs_feature(SAMPLE_USGS_FEATURE)

        assert result is not None
        assert result.id == "nc75095866"
        assert result.magnitude == 4.2
        assert result.place == "10km NE of San Francisco, CA"
        assert result.latitude == 37.7749
        assert result.longitude == -122.4194
        assert result.depth_km == 10.5
        assert result.source_url.endswith("nc75095866")
        assert result.time == datetime(2023, 12, 19, 16, 0, tzinfo=timezone.utc)

    def test_missing_magnitude_defaults_to_zero(self):
        feature = {**SAMPLE_USGS_FEATURE,
                   "properties": {**SAMPLE_USGS_FEATURE["properties"], "mag": None}}
        assert parse_usgs_feature(feature).magnitude == 0.0

    def test_missing_place_synthesized(self):
        feature = {**SAMPLE_USGS_FEATURE,
                   "properties": {**SAMPLE_USGS_FEATURE["properties"], "place": None}}
        assert parse_usgs_feature(feature).place == "Lat 37.77, Lon -122.42"

    def test_missing_time_maps_to_epoch(self):
        feature = {**SAMPLE_USGS_FEATURE,
                   "properties": {**SAMPLE_USGS_FEATURE["properties"], "time": None}}
        assert parse_usgs_feature(feature).time == EPOCH

    def test_two_coordinates_are_enough(self):
        feature = {**SAMPLE_USGS_FEATURE, "geometry": {"coordinates": [-122.0, 37.0]}}
        result = parse_usgs_feature(feature)
        assert result is not None
        assert result.depth_km is None

    @pytest.mark.parametrize("coordinates", [[], [-122.0], ["x", 37.0], [None, None], None])
    def test_unusable_coordinates_dropped(self, coordinates):
        feature = {**SAMPLE_USGS_FEATURE, "geometry": {"coordinates": coordinates}}
        assert parse_usgs_feature(feature) is None


class TestParseUsgsFeed:
    """Tests for parse_usgs_feed()."""

    def test_drops_invalid_keeps_valid(self):
        bad = {**SAMPLE_USGS_FEATURE, "id": "bad", "geometry": {"coordinates": []}}
        result = parse_usgs_feed({"features": [SAMPLE_USGS_FEATURE, bad]})
        assert [e.id for e in result] == ["nc75095866"]

    def test_missing_features_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_usgs_feed({"type": "FeatureCollection"})

    def test_non_object_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_usgs_feed([SAMPLE_USGS_FEATURE])


class TestParseAfadItem:
    """Tests for parse_afad_item()."""

    def test_parses_valid_item(self):
        result = parse_afad_item(SAMPLE_AFAD_ITEM)

        assert result.id == "612345"
        assert result.latitude == 39.2085
        assert result.longitude == 28.1635
        assert result.magnitude == 3.4
        assert result.depth_km == 7.03
        assert result.place == "Sindirgi (Balikesir)"
        assert result.time == datetime(2024, 5, 1, 10, 15, 30, tzinfo=timezone.utc)
        assert result.source_url is None

    def test_space_separated_date_is_same_instant(self):
        item = {**SAMPLE_AFAD_ITEM, "date": "2024-05-01 10:15:30"}
        assert parse_afad_item(item).time == parse_afad_item(SAMPLE_AFAD_ITEM).time

    def test_malformed_date_drops_record(self):
        """AFAD never defaults a date; the record is dropped."""
        item = {**SAMPLE_AFAD_ITEM, "date": "yesterday-ish"}
        assert parse_afad_item(item) is None

    @pytest.mark.parametrize("field", ["latitude", "longitude"])
    def test_non_numeric_coordinate_drops_record(self, field):
        item = {**SAMPLE_AFAD_ITEM, field: "north"}
        assert parse_afad_item(item) is None

    def test_missing_magnitude_defaults_to_zero(self):
        item = {**SAMPLE_AFAD_ITEM, "magnitude": None}
        assert parse_afad_item(item).magnitude == 0.0

    def test_blank_location_synthesized(self):
        item = {**SAMPLE_AFAD_ITEM, "location": "  "}
        assert parse_afad_item(item).place == "Lat 39.21, Lon 28.16"


class TestParseAfadEvents:
    """Tests for parse_afad_events()."""

    def test_non_list_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_afad_events({"result": []})

    def test_drops_only_invalid_records(self):
        items = [SAMPLE_AFAD_ITEM, {**SAMPLE_AFAD_ITEM, "latitude": ""}, "junk"]
        assert len(parse_afad_events(items)) == 1


class TestParseKandilliItem:
    """Tests for parse_kandilli_item()."""

    def test_parses_valid_item(self):
        result = parse_kandilli_item(SAMPLE_KANDILLI_ITEM, tz=ISTANBUL, now=NOW)

        assert result.id == "kEw1a2b3"
        assert result.longitude == 27.84
        assert result.latitude == 38.92
        assert result.magnitude == 2.8
        assert result.place == "AKHISAR (MANISA)"
        assert result.time == datetime(2024, 5, 1, 10, 15, 30, tzinfo=timezone.utc)

    def test_malformed_date_defaults_to_now(self):
        """Kandilli keeps the record and uses now."""
        item = {**SAMPLE_KANDILLI_ITEM, "date_time": "??"}
        result = parse_kandilli_item(item, tz=ISTANBUL, now=NOW)
        assert result is not None
        assert result.time == NOW

    def test_single_coordinate_drops_record(self):
        item = {**SAMPLE_KANDILLI_ITEM, "geojson": {"type": "Point", "coordinates": [27.84]}}
        assert parse_kandilli_item(item, now=NOW) is None

    @pytest.mark.parametrize("coordinates", [["x", 38.92], [27.84, None], [float("nan"), 38.92], ["", ""]])
    def test_non_numeric_coordinate_drops_record(self, coordinates):
        item = {**SAMPLE_KANDILLI_ITEM, "geojson": {"type": "Point", "coordinates": coordinates}}
        assert parse_kandilli_item(item, now=NOW) is None

    def test_negative_magnitude_clamped(self):
        item = {**SAMPLE_KANDILLI_ITEM, "mag": "-1"}
        assert parse_kandilli_item(item, now=NOW).magnitude == 0.0

    def test_missing_geojson_drops_record(self):
        item = {k: v for k, v in SAMPLE_KANDILLI_ITEM.items() if k != "geojson"}
        assert parse_kandilli_item(item, now=NOW) is None

    def test_missing_id_gets_stable_synthetic_id(self):
        item = {k: v for k, v in SAMPLE_KANDILLI_ITEM.items() if k != "earthquake_id"}
        first = parse_kandilli_item(item, now=NOW)
        second = parse_kandilli_item(item, now=NOW + timedelta(minutes=10))
        assert first.id.startswith("kandilli-")
        assert first.id == second.id

    def test_missing_magnitude_and_title(self):
        item = {**SAMPLE_KANDILLI_ITEM, "mag": None, "title": None}
        result = parse_kandilli_item(item, now=NOW)
        assert result.magnitude == 0.0
        assert result.place == "Lat 38.92, Lon 27.84"


class TestParseKandilliLive:
    """Tests for parse_kandilli_live()."""

    def test_reads_result_envelope(self):
        result = parse_kandilli_live({"result": [SAMPLE_KANDILLI_ITEM]}, tz=ISTANBUL, now=NOW)
        assert [e.id for e in result] == ["kEw1a2b3"]

    def test_missing_result_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_kandilli_live({"status": True})

    def test_non_object_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_kandilli_live([SAMPLE_KANDILLI_ITEM])

    def test_keeps_only_records_with_numeric_coordinates(self):
        items = [
            SAMPLE_KANDILLI_ITEM,
            {**SAMPLE_KANDILLI_ITEM, "earthquake_id": "bad-lon",
             "geojson": {"type": "Point", "coordinates": ["x", 39.0]}},
            {**SAMPLE_KANDILLI_ITEM, "earthquake_id": "bad-lat",
             "geojson": {"type": "Point", "coordinates": [35.0, None]}},
        ]
        result = parse_kandilli_live({"result": items}, tz=ISTANBUL, now=NOW)
        assert [e.id for e in result] == ["kEw1a2b3"]
