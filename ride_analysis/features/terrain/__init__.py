"""
Terrain classification module.

Usage:
    from ride_analysis.features.terrain import TerrainClassifier

Components:
- TerrainClassifier: sampling, batched Overpass queries, merging
- OverpassClient: async HTTP client for the Overpass API
- RetryPolicy / call_with_retry: exponential backoff
- classify_* functions: tag rules and elevation heuristic
"""

from .classifier import (
    PointClassification,
    classify_by_elevation,
    classify_elements,
    classify_remote,
)
from .overpass import OverpassClient
from .retry import RetryPolicy, call_with_retry
from .schemas import ElevationProfile, TerrainAnalysis, TerrainSegment, TerrainSummary
from .service import TerrainClassifier

__all__ = [
    "TerrainClassifier",
    "OverpassClient",
    "RetryPolicy",
    "call_with_retry",
    "PointClassification",
    "classify_by_elevation",
    "classify_elements",
    "classify_remote",
    "ElevationProfile",
    "TerrainAnalysis",
    "TerrainSegment",
    "TerrainSummary",
]
