"""
Metrics Computer

Turns a parsed Route into RideMetrics: distance, duration, elevation gain,
speed profile and bounding box.
"""

import logging
from typing import List, Optional

from ride_analysis.features.track import Route
from ride_analysis.shared.elevation import calculate_elevation_changes
from ride_analysis.shared.errors import ValidationError
from ride_analysis.shared.geo import bounding_box, step_distances_m
from .schemas import BoundingBox, RideMetrics

logger = logging.getLogger(__name__)


# A step shorter than this is GPS jitter while stopped
MIN_MOVING_STEP_M = 0.5

MS_TO_KMH = 3.6


class MetricsComputer:
    """
    Computes ride metrics from a route.

    Usage:
        metrics = MetricsComputer().compute(route)
    """

    def compute(self, route: Route) -> RideMetrics:
        """
        Compute metrics for a route.

        Args:
            route: Parsed route

        Returns:
            RideMetrics

        Raises:
            ValidationError: If the route has fewer than 2 points
        """
        if len(route) < 2:
            raise ValidationError(
                f"At least 2 points are required for metrics, got {len(route)}"
            )

        steps = step_distances_m(route.coords)
        distance_m = sum(steps)

        duration_s = self._duration_seconds(route)
        average_speed = (distance_m / duration_s) * MS_TO_KMH if duration_s > 0 else 0.0

        elevation_gain: Optional[float] = None
        elevation_loss: Optional[float] = None
        min_elevation: Optional[float] = None
        max_elevation: Optional[float] = None
        if route.has_elevation:
            elevation_gain, elevation_loss = calculate_elevation_changes(route.elevations)
            known = [e for e in route.elevations if e is not None]
            min_elevation = min(known)
            max_elevation = max(known)

        min_lat, max_lat, min_lon, max_lon = bounding_box(route.coords)

        metrics = RideMetrics(
            distance_meters=distance_m,
            duration_seconds=duration_s,
            elevation_gain_meters=elevation_gain,
            average_speed_kmh=average_speed,
            bounding_box=BoundingBox(
                min_lat=min_lat, max_lat=max_lat,
                min_lon=min_lon, max_lon=max_lon,
            ),
            moving_time_seconds=self._moving_time_seconds(route, steps),
            max_speed_kmh=self._max_speed_kmh(route, steps),
            elevation_loss_meters=elevation_loss,
            min_elevation_meters=min_elevation,
            max_elevation_meters=max_elevation,
            start_time=route.start_time,
            end_time=route.end_time,
            points_count=len(route),
        )

        logger.info(
            f"Metrics: {distance_m / 1000:.2f} km in {duration_s / 60:.1f} min, "
            f"avg {average_speed:.1f} km/h, gain {elevation_gain if elevation_gain is not None else 'n/a'} m"
        )
        return metrics

    @staticmethod
    def _duration_seconds(route: Route) -> float:
        """Last minus first timestamp; 0 if either end is missing."""
        start = route.start_time
        end = route.end_time
        if start is None or end is None:
            return 0.0
        return max(0.0, (end - start).total_seconds())

    @staticmethod
    def _moving_time_seconds(route: Route, steps: List[float]) -> float:
        moving = 0.0
        for i, distance in enumerate(steps):
            t1 = route.points[i].timestamp
            t2 = route.points[i + 1].timestamp
            if t1 is None or t2 is None:
                continue
            if distance > MIN_MOVING_STEP_M:
                moving += (t2 - t1).total_seconds()
        return moving

    @staticmethod
    def _max_speed_kmh(route: Route, steps: List[float]) -> float:
        max_speed = 0.0
        for i, distance in enumerate(steps):
            t1 = route.points[i].timestamp
            t2 = route.points[i + 1].timestamp
            if t1 is None or t2 is None:
                continue
            dt = (t2 - t1).total_seconds()
            if dt <= 0:
                continue
            max_speed = max(max_speed, distance / dt * MS_TO_KMH)
        return max_speed
