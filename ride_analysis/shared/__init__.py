"""
Shared utilities (NOT business logic).

Usage:
    from ride_analysis.shared import haversine, calculate_elevation_changes
    from ride_analysis.shared.errors import ParseError
"""
from .geo import (
    haversine,
    haversine_m,
    step_distances_m,
    initial_bearing,
    bounding_box,
    is_valid_coordinate,
    circular_mean_deg,
    EARTH_RADIUS_KM,
)
from .elevation import (
    calculate_elevation_changes,
    average_elevation,
    average_abs_slope_percent,
)
from .formulas import (
    met_for_speed,
    met_calories,
    climbing_calories,
    apportion,
)
from .constants import (
    TerrainType,
    WeatherProviderType,
    ClassificationSource,
    REMOTE_CLASSIFICATION_CONFIDENCE,
)
from .errors import (
    RideAnalysisError,
    ParseError,
    ValidationError,
    ExternalServiceError,
    ConfigurationError,
)

__all__ = [
    # geo
    "haversine",
    "haversine_m",
    "step_distances_m",
    "initial_bearing",
    "bounding_box",
    "is_valid_coordinate",
    "circular_mean_deg",
    "EARTH_RADIUS_KM",
    # elevation
    "calculate_elevation_changes",
    "average_elevation",
    "average_abs_slope_percent",
    # formulas
    "met_for_speed",
    "met_calories",
    "climbing_calories",
    "apportion",
    # constants
    "TerrainType",
    "WeatherProviderType",
    "ClassificationSource",
    "REMOTE_CLASSIFICATION_CONFIDENCE",
    # errors
    "RideAnalysisError",
    "ParseError",
    "ValidationError",
    "ExternalServiceError",
    "ConfigurationError",
]
