"""
Ride Analysis Service

Composes the pipeline for one ride:
    parse -> metrics -> (weather || terrain) -> calories -> result

Only ParseError and ValidationError reach the caller; weather and terrain
degrade instead of failing.
"""

import asyncio
import logging
from typing import Optional, Union

import httpx

from ride_analysis.config import Settings, settings as default_settings
from ride_analysis.features.calories import CalorieModel, CalorieModelConfig
from ride_analysis.features.metrics import MetricsComputer
from ride_analysis.features.terrain import TerrainClassifier
from ride_analysis.features.track import Route, TrackParserService
from ride_analysis.features.weather import (
    WeatherEnrichmentCoordinator,
    create_weather_provider,
)
from ride_analysis.shared.geo import haversine_m, initial_bearing
from .schemas import RideAnalysisResult

logger = logging.getLogger(__name__)

# Start and end closer than this: the ride is a loop without a heading
LOOP_THRESHOLD_M = 100.0


def ride_heading(route: Route) -> Optional[float]:
    """
    Overall direction of travel, first point to last.

    Returns:
        Bearing in degrees, or None for loops (start ~ end)
    """
    if len(route) < 2:
        return None

    first = route.points[0]
    last = route.points[-1]
    if haversine_m(first.latitude, first.longitude, last.latitude, last.longitude) < LOOP_THRESHOLD_M:
        return None
    return initial_bearing(first.latitude, first.longitude, last.latitude, last.longitude)


class RideAnalysisService:
    """
    Entry point for analysing a ride.

    Usage:
        service = RideAnalysisService.from_settings(settings)
        result = await service.analyze(gpx_bytes, rider_weight_kg=72)
        payload = result.to_dict()
    """

    def __init__(
        self,
        weather: Optional[WeatherEnrichmentCoordinator] = None,
        terrain: Optional[TerrainClassifier] = None,
        calorie_model: Optional[CalorieModel] = None,
        metrics_computer: Optional[MetricsComputer] = None
    ):
        self.weather = weather or WeatherEnrichmentCoordinator(provider=None)
        self.terrain = terrain or TerrainClassifier(enable_api_calls=False)
        self.calorie_model = calorie_model or CalorieModel()
        self.metrics_computer = metrics_computer or MetricsComputer()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        weather_provider: Optional[str] = None,
        enable_terrain_api: Optional[bool] = None
    ) -> "RideAnalysisService":
        """
        Wire the pipeline from configuration.

        Args:
            settings: Settings instance (module-level settings by default)
            client: Shared httpx client for weather and Overpass calls
            weather_provider: Overrides settings.weather_provider
            enable_terrain_api: Overrides settings.terrain_enable_api_calls
        """
        settings = settings or default_settings

        provider = create_weather_provider(
            (weather_provider or settings.weather_provider).lower(),
            settings,
            client=client,
        )

        terrain = TerrainClassifier.from_settings(settings, client=client)
        if enable_terrain_api is not None:
            terrain.enable_api_calls = enable_terrain_api

        return cls(
            weather=WeatherEnrichmentCoordinator(
                provider, deadline_seconds=settings.weather_timeout_seconds
            ),
            terrain=terrain,
            calorie_model=CalorieModel(CalorieModelConfig(
                default_rider_weight_kg=settings.default_rider_weight_kg,
                wind_resistance_coefficient=settings.wind_resistance_coefficient,
            )),
        )

    async def analyze(
        self,
        content: Union[bytes, str],
        rider_weight_kg: Optional[float] = None
    ) -> RideAnalysisResult:
        """
        Analyse one GPX document.

        Args:
            content: GPX document
            rider_weight_kg: Rider weight, default weight when None

        Returns:
            RideAnalysisResult

        Raises:
            ParseError: If the document cannot be read
            ValidationError: If the track is unusable (< 2 points,
                timestamps going backwards)
        """
        route = TrackParserService.parse(content)
        metrics = self.metrics_computer.compute(route)

        weather, terrain = await asyncio.gather(
            self.weather.enrich(metrics.bounding_box, route.start_time),
            self.terrain.analyze_route(route),
        )

        heading = ride_heading(route)
        calories = self.calorie_model.estimate(metrics, rider_weight_kg, weather, heading)

        logger.info(
            f"Ride analysed: {metrics.distance_km:.2f} km, "
            f"{calories.total_calories} kcal, weather={'yes' if weather.has_data else 'no'}, "
            f"terrain={terrain.summary.dominant_terrain.value}"
        )

        return RideAnalysisResult(
            route_name=route.name,
            heading_deg=heading,
            metrics=metrics,
            calories=calories,
            weather=weather,
            terrain=terrain,
        )

    def analyze_sync(
        self,
        content: Union[bytes, str],
        rider_weight_kg: Optional[float] = None
    ) -> RideAnalysisResult:
        """Blocking wrapper around analyze() for non-async callers."""
        return asyncio.run(self.analyze(content, rider_weight_kg))
