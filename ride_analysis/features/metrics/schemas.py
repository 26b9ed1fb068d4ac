"""
Ride metrics schemas.

Pydantic models handed to the persistence layer.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """Route extent in degrees."""

    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> Tuple[float, float]:
        """Midpoint used as the representative weather location."""
        return (
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )


class RideMetrics(BaseModel):
    """Validated metrics of one ride."""

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(ge=0)
    duration_seconds: float = Field(ge=0)
    # None when no point carries elevation
    elevation_gain_meters: Optional[float] = Field(default=None, ge=0)
    average_speed_kmh: float = Field(ge=0)
    bounding_box: BoundingBox

    # Speed profile
    moving_time_seconds: float = Field(default=0.0, ge=0)
    max_speed_kmh: float = Field(default=0.0, ge=0)

    # Elevation profile
    elevation_loss_meters: Optional[float] = Field(default=None, ge=0)
    min_elevation_meters: Optional[float] = None
    max_elevation_meters: Optional[float] = None

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    points_count: int = 0

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000

    @property
    def duration_hours(self) -> float:
        return self.duration_seconds / 3600

    @property
    def has_elevation(self) -> bool:
        return self.elevation_gain_meters is not None
