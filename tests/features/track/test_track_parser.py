"""
Tests for TrackParserService and the Route model.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ride_analysis.features.track import Route, TrackParserService, TrackPoint
from ride_analysis.shared.errors import ParseError, ValidationError


# =============================================================================
# Test Parsing
# =============================================================================

class TestParse:
    """Tests for well-formed GPX documents."""

    def test_points_in_order(self, make_gpx, straight_points):
        route = TrackParserService.parse(make_gpx(straight_points(5), name="Morning Ride"))

        assert len(route) == 5
        assert route.name == "Morning Ride"
        lats = [p.latitude for p in route.points]
        assert lats == sorted(lats)

    def test_elevation_and_time(self, make_gpx, straight_points):
        route = TrackParserService.parse(make_gpx(straight_points(3)))

        first = route.points[0]
        assert first.elevation == pytest.approx(800.0)
        assert first.timestamp == datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
        assert route.start_time == first.timestamp
        assert route.end_time - route.start_time == timedelta(minutes=2)

    def test_bytes_input(self, make_gpx, straight_points):
        content = make_gpx(straight_points(3)).encode("utf-8")
        assert len(TrackParserService.parse(content)) == 3

    def test_optional_fields_missing(self, make_gpx):
        route = TrackParserService.parse(make_gpx([
            (43.0, 76.9, None, None),
            (43.001, 76.9, None, None),
        ]))

        assert not route.has_elevation
        assert route.start_time is None
        assert route.elevations == [None, None]

    def test_route_points_fallback(self):
        """<rtept> is used when there are no tracks."""
        content = (
            '<?xml version="1.0"?>'
            '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
            '<rte><rtept lat="43.0" lon="76.9"/><rtept lat="43.01" lon="76.9"/></rte>'
            '</gpx>'
        )
        assert len(TrackParserService.parse(content)) == 2

    def test_times_without_offset_read_as_utc(self):
        """A track mixing "Z" times and times without an offset parses."""
        content = (
            '<?xml version="1.0"?>'
            '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
            '<trk><trkseg>'
            '<trkpt lat="43.0" lon="76.9"><time>2024-06-01T08:00:00Z</time></trkpt>'
            '<trkpt lat="43.001" lon="76.9"><time>2024-06-01T08:05:00</time></trkpt>'
            '</trkseg></trk></gpx>'
        )
        route = TrackParserService.parse(content)

        assert all(p.timestamp.tzinfo is not None for p in route.points)
        assert route.points[1].timestamp == datetime(2024, 6, 1, 8, 5, tzinfo=timezone.utc)
        assert route.end_time - route.start_time == timedelta(minutes=5)


# =============================================================================
# Test Errors
# =============================================================================

class TestParseErrors:
    """Tests for malformed input."""

    def test_empty(self):
        with pytest.raises(ParseError):
            TrackParserService.parse("")

    def test_not_xml(self):
        with pytest.raises(ParseError):
            TrackParserService.parse("this is not a gpx file")

    def test_no_points(self):
        content = (
            '<?xml version="1.0"?>'
            '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
            '<trk><trkseg></trkseg></trk></gpx>'
        )
        with pytest.raises(ParseError):
            TrackParserService.parse(content)

    def test_out_of_range_latitude(self, make_gpx):
        with pytest.raises(ParseError):
            TrackParserService.parse(make_gpx([
                (95.0, 76.9, None, None),
                (43.0, 76.9, None, None),
            ]))

    def test_invalid_utf8(self):
        with pytest.raises(ParseError):
            TrackParserService.parse(b"\xff\xfe\x00garbage")

    def test_timestamps_backwards(self, make_gpx):
        start = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            TrackParserService.parse(make_gpx([
                (43.0, 76.9, None, start),
                (43.001, 76.9, None, start - timedelta(minutes=1)),
            ]))


# =============================================================================
# Test Route Model
# =============================================================================

class TestRouteModel:
    """Tests for Route invariants."""

    def test_point_out_of_range(self):
        with pytest.raises(ValueError):
            TrackPoint(latitude=0.0, longitude=181.0)

    def test_list_normalised_to_tuple(self):
        route = Route(points=[TrackPoint(43.0, 76.9), TrackPoint(43.1, 76.9)])
        assert isinstance(route.points, tuple)
        assert route.coords == ((43.0, 76.9), (43.1, 76.9))

    def test_equal_timestamps_allowed(self):
        t = datetime(2024, 6, 1, 8, 0)
        route = Route(points=(TrackPoint(43.0, 76.9, timestamp=t), TrackPoint(43.1, 76.9, timestamp=t)))
        assert route.start_time == route.end_time

    def test_mixed_aware_and_naive_rejected(self):
        aware = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
        naive = datetime(2024, 6, 1, 8, 5)
        with pytest.raises(ValidationError):
            Route(points=(
                TrackPoint(43.0, 76.9, timestamp=aware),
                TrackPoint(43.1, 76.9, timestamp=naive),
            ))
