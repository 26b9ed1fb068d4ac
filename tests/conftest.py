"""
Shared fixtures: GPX documents and routes built in code.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

import pytest

from ride_analysis.features.track import Route, TrackPoint


START = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)

# ~111 m per 0.001 degree of latitude
LAT_STEP_100M = 100 / 111_195


def _gpx(points: Iterable[Tuple], name: Optional[str]) -> str:
    rows = []
    for lat, lon, ele, time in points:
        children = ""
        if ele is not None:
            children += f"<ele>{ele}</ele>"
        if time is not None:
            children += f"<time>{time.strftime('%Y-%m-%dT%H:%M:%SZ')}</time>"
        rows.append(f'<trkpt lat="{lat}" lon="{lon}">{children}</trkpt>')

    name_tag = f"<name>{name}</name>" if name else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
        f'<trk>{name_tag}<trkseg>\n' + "\n".join(rows) + '\n</trkseg></trk>\n</gpx>\n'
    )


@pytest.fixture
def make_gpx():
    """Build a GPX document from (lat, lon, ele, time) tuples."""
    def build(points, name: Optional[str] = None) -> str:
        return _gpx(points, name)
    return build


@pytest.fixture
def straight_points():
    """11 points heading north, 100 m and 60 s apart, climbing 5 m per step."""
    def build(count: int = 11, start: datetime = START, elevation: bool = True):
        return [
            (
                43.0 + i * LAT_STEP_100M,
                76.9,
                (800.0 + i * 5) if elevation else None,
                start + timedelta(seconds=60 * i),
            )
            for i in range(count)
        ]
    return build


@pytest.fixture
def make_route():
    """Route from (lat, lon, ele) tuples, no timestamps."""
    def build(points) -> Route:
        return Route(points=tuple(
            TrackPoint(latitude=lat, longitude=lon, elevation=ele)
            for lat, lon, ele in points
        ))
    return build
