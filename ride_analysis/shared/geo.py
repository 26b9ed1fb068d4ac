"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Iterable, Sequence, Tuple

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def haversine_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """Great-circle distance in meters."""
    return haversine(lat1, lon1, lat2, lon2) * 1000.0


def step_distances_m(coords: Sequence[Tuple[float, float]]) -> list[float]:
    """
    Distances between consecutive coordinates.

    Args:
        coords: List of (lat, lon) tuples

    Returns:
        List of len(coords) - 1 distances in meters; step i is i -> i+1
    """
    return [
        haversine_m(coords[i][0], coords[i][1], coords[i + 1][0], coords[i + 1][1])
        for i in range(len(coords) - 1)
    ]


def initial_bearing(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Initial compass bearing from point 1 to point 2.

    Returns:
        Bearing in degrees, 0 = north, 90 = east, range [0, 360)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)

    x = math.sin(delta_lon) * math.cos(lat2_rad)
    y = (
        math.cos(lat1_rad) * math.sin(lat2_rad) -
        math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lon)
    )
    return (math.degrees(math.atan2(x, y)) + 360.0) % 360.0


def bounding_box(coords: Iterable[Tuple[float, float]]) -> Tuple[float, float, float, float]:
    """
    Min/max latitude and longitude.

    Returns:
        (min_lat, max_lat, min_lon, max_lon)

    Raises:
        ValueError: If coords is empty
    """
    coords = list(coords)
    if not coords:
        raise ValueError("bounding_box() requires at least one coordinate")
    lats = [c[0] for c in coords]
    lons = [c[1] for c in coords]
    return min(lats), max(lats), min(lons), max(lons)


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Check WGS84 latitude/longitude ranges."""
    if math.isnan(lat) or math.isnan(lon):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def circular_mean_deg(angles: Iterable[float]) -> float | None:
    """Mean of compass directions (handles 350/10 wrap-around)."""
    sin_sum = 0.0
    cos_sum = 0.0
    count = 0
    for angle in angles:
        sin_sum += math.sin(math.radians(angle))
        cos_sum += math.cos(math.radians(angle))
        count += 1
    if count == 0:
        return None
    return (math.degrees(math.atan2(sin_sum, cos_sum)) + 360.0) % 360.0
