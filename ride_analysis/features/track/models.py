"""
Track data types.

Plain frozen dataclasses: a Route is created once by the parser and shared
read-only by every later stage of an analysis.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from ride_analysis.shared.errors import ValidationError
from ride_analysis.shared.geo import is_valid_coordinate


@dataclass(frozen=True)
class TrackPoint:
    """A single recorded GPS fix."""
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValueError(
                f"Coordinate out of range: ({self.latitude}, {self.longitude})"
            )

    @property
    def coords(self) -> Tuple[float, float]:
        return self.latitude, self.longitude


def _goes_backwards(current: datetime, previous: datetime, index: int) -> bool:
    try:
        return current < previous
    except TypeError as e:
        raise ValidationError(
            f"Point {index} mixes timezone-aware and naive timestamps"
        ) from e


@dataclass(frozen=True)
class Route:
    """
    Ordered sequence of track points in recording order.

    Raises:
        ValidationError: If present timestamps go backwards or mix
            aware and naive values
    """
    points: Tuple[TrackPoint, ...]
    name: Optional[str] = None
    description: Optional[str] = None
    _coords: Tuple[Tuple[float, float], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        # Normalise lists to tuples so the route stays immutable
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "_coords", tuple(p.coords for p in self.points))

        previous: Optional[datetime] = None
        for index, point in enumerate(self.points):
            if point.timestamp is None:
                continue
            if previous is not None and _goes_backwards(point.timestamp, previous, index):
                raise ValidationError(
                    f"Timestamps go backwards at point {index}: "
                    f"{point.timestamp.isoformat()} < {previous.isoformat()}"
                )
            previous = point.timestamp

    def __len__(self) -> int:
        return len(self.points)

    @property
    def coords(self) -> Tuple[Tuple[float, float], ...]:
        """(lat, lon) tuples for the geo helpers."""
        return self._coords

    @property
    def elevations(self) -> List[Optional[float]]:
        return [p.elevation for p in self.points]

    @property
    def has_elevation(self) -> bool:
        return any(p.elevation is not None for p in self.points)

    @property
    def start_time(self) -> Optional[datetime]:
        """Timestamp of the first point, if it was recorded."""
        return self.points[0].timestamp if self.points else None

    @property
    def end_time(self) -> Optional[datetime]:
        return self.points[-1].timestamp if self.points else None
