"""
Ride analysis orchestration.

Usage:
    from ride_analysis.features.analysis import RideAnalysisService
"""

from .schemas import RideAnalysisResult
from .service import RideAnalysisService, ride_heading, LOOP_THRESHOLD_M

__all__ = [
    "RideAnalysisService",
    "RideAnalysisResult",
    "ride_heading",
    "LOOP_THRESHOLD_M",
]
