"""
Track parsing module.

Usage:
    from ride_analysis.features.track import TrackParserService, Route

Components:
- TrackParserService: Parse GPX documents into a Route
- TrackPoint / Route: Immutable point sequence shared by later stages
"""

from .models import TrackPoint, Route
from .parser import TrackParserService

__all__ = [
    "TrackPoint",
    "Route",
    "TrackParserService",
]
