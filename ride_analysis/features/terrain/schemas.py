"""
Terrain analysis schemas.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ride_analysis.shared.constants import TerrainType


class TerrainSegment(BaseModel):
    """Maximal run of consecutive points sharing one terrain type."""

    model_config = ConfigDict(frozen=True)

    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)          # inclusive
    distance_meters: float = Field(ge=0)
    terrain_type: TerrainType
    average_elevation_meters: Optional[float] = None
    confidence: float = Field(ge=0, le=1)


class TerrainSummary(BaseModel):
    """Distance per terrain type (keys are TerrainType values)."""

    model_config = ConfigDict(frozen=True)

    dominant_terrain: TerrainType
    distribution_meters: Dict[str, float]
    percentages: Dict[str, float]


class ElevationProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_meters: float = 0.0
    max_meters: float = 0.0
    range_meters: float = 0.0
    average_slope_percent: float = 0.0


class TerrainAnalysis(BaseModel):
    """Segments, summary and how the sampled points were classified."""

    model_config = ConfigDict(frozen=True)

    segments: List[TerrainSegment]
    summary: TerrainSummary
    elevation_profile: ElevationProfile
    sampled_points: int = 0
    remote_classifications: int = 0
    fallback_classifications: int = 0
