"""
Track Parser Service

Parses GPX documents into a Route.
"""

import logging
import math
from datetime import timezone
from typing import List, Union

import gpxpy
import gpxpy.gpx

from ride_analysis.shared.errors import ParseError
from ride_analysis.shared.geo import is_valid_coordinate
from .models import Route, TrackPoint

logger = logging.getLogger(__name__)


class TrackParserService:
    """Service for parsing GPX files."""

    @staticmethod
    def parse(content: Union[bytes, str]) -> Route:
        """
        Parse GPX content into a Route.

        Track points are preferred; route points are used only when the
        document has no tracks.

        Args:
            content: GPX file content as bytes or text

        Returns:
            Route with points in recording order

        Raises:
            ParseError: If GPX is invalid, has no points, or carries
                out-of-range / non-numeric coordinates
            ValidationError: If timestamps go backwards
        """
        if isinstance(content, bytes):
            try:
                content = content.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ParseError(f"GPX content is not valid UTF-8: {e}") from e

        if not content or not content.strip():
            raise ParseError("Empty track document")

        try:
            gpx = gpxpy.parse(content)
        except Exception as e:
            logger.error(f"Failed to parse GPX: {e}")
            raise ParseError(f"Invalid GPX file: {e}") from e

        raw_points = TrackParserService._collect_points(gpx)
        if not raw_points:
            raise ParseError("GPX file contains no track or route points")

        points: List[TrackPoint] = []
        for index, raw in enumerate(raw_points):
            points.append(TrackParserService._to_track_point(raw, index))

        name = gpx.name or (gpx.tracks[0].name if gpx.tracks else None)
        route = Route(points=tuple(points), name=name, description=gpx.description)

        logger.info(f"Parsed GPX '{name or 'unnamed'}' with {len(points)} points")
        return route

    @staticmethod
    def _collect_points(gpx: gpxpy.gpx.GPX) -> list:
        """Track points from every segment, or route points as a fallback."""
        points = []

        for track in gpx.tracks:
            for segment in track.segments:
                points.extend(segment.points)

        if not points:
            for route in gpx.routes:
                points.extend(route.points)

        return points

    @staticmethod
    def _to_track_point(raw, index: int) -> TrackPoint:
        try:
            lat = float(raw.latitude)
            lon = float(raw.longitude)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Point {index} has non-numeric coordinates") from e

        if not is_valid_coordinate(lat, lon):
            raise ParseError(
                f"Point {index} has out-of-range coordinates: ({lat}, {lon})"
            )

        elevation = raw.elevation
        if elevation is not None and math.isnan(elevation):
            elevation = None

        # GPX times without an offset are UTC
        timestamp = raw.time
        if timestamp is not None and timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)

        return TrackPoint(
            latitude=lat,
            longitude=lon,
            elevation=elevation,
            timestamp=timestamp,
        )
