"""
Ride metrics module.

Components:
- MetricsComputer: distance, duration, elevation, speed, bounding box
- RideMetrics / BoundingBox: Pydantic result schemas
"""

from .computer import MetricsComputer
from .schemas import BoundingBox, RideMetrics

__all__ = [
    "MetricsComputer",
    "BoundingBox",
    "RideMetrics",
]
