"""
Weather enrichment module.

Usage:
    from ride_analysis.features.weather import (
        WeatherEnrichmentCoordinator, create_weather_provider,
    )

Components:
- WeatherProvider: capability-described provider interface
- create_weather_provider: factory driven by Settings
- WeatherEnrichmentCoordinator: current vs historical selection with fallback
- WeatherSnapshot: canonical weather schema
"""

from .schemas import WeatherSnapshot
from .providers import (
    WeatherProvider,
    OpenWeatherMapProvider,
    WeatherAPIProvider,
    WeatherbitProvider,
    VisualCrossingProvider,
    create_weather_provider,
)
from .coordinator import WeatherEnrichmentCoordinator, local_date

__all__ = [
    "WeatherSnapshot",
    "WeatherProvider",
    "OpenWeatherMapProvider",
    "WeatherAPIProvider",
    "WeatherbitProvider",
    "VisualCrossingProvider",
    "create_weather_provider",
    "WeatherEnrichmentCoordinator",
    "local_date",
]
