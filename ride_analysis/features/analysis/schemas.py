"""
Composed ride analysis result.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from ride_analysis.features.calories import CalorieEstimate
from ride_analysis.features.metrics import RideMetrics
from ride_analysis.features.terrain import TerrainAnalysis
from ride_analysis.features.weather import WeatherSnapshot


class RideAnalysisResult(BaseModel):
    """Everything the storage layer receives for one ride."""

    model_config = ConfigDict(frozen=True)

    route_name: Optional[str] = None
    heading_deg: Optional[float] = None
    metrics: RideMetrics
    calories: CalorieEstimate
    weather: WeatherSnapshot
    terrain: TerrainAnalysis

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict (datetimes as ISO strings, enums as values)."""
        return self.model_dump(mode="json")
