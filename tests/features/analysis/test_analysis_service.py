"""
Tests for RideAnalysisService (end-to-end with mocked enrichments).
"""

import asyncio
import json
from datetime import date

import pytest

from ride_analysis.config import Settings
from ride_analysis.features.analysis import RideAnalysisService, ride_heading
from ride_analysis.features.calories import FACTOR_ENVIRONMENTAL, FACTOR_WIND
from ride_analysis.features.terrain import TerrainClassifier
from ride_analysis.features.track import Route, TrackPoint
from ride_analysis.features.weather import (
    WeatherEnrichmentCoordinator,
    WeatherProvider,
    WeatherSnapshot,
)
from ride_analysis.shared.constants import TerrainType
from ride_analysis.shared.errors import ParseError, ValidationError


RIDE_DAY = date(2024, 6, 1)


class StaticProvider(WeatherProvider):
    """Fixed weather, optionally slow."""

    def __init__(self, delay=0.0):
        super().__init__(api_key="key")
        self.delay = delay

    @property
    def name(self):
        return "Static"

    @property
    def max_historical_days_supported(self):
        return 365

    async def current_weather(self, lat, lon):
        if self.delay:
            await asyncio.sleep(self.delay)
        return WeatherSnapshot(
            has_data=True, provider=self.name, temperature_c=31.0,
            humidity_percent=75.0, wind_speed_kmh=18.0, wind_direction_deg=0.0,
            pressure_hpa=1008.0, condition="Clear",
        )

    async def historical_weather(self, lat, lon, date_, today=None):
        return await self.current_weather(lat, lon)


class StaticOverpass:
    async def fetch_elements(self, url, lat, lon):
        return [{"type": "way", "tags": {"leisure": "park"}}]


async def no_sleep(seconds):
    return None


def make_service(provider=None, deadline=None):
    return RideAnalysisService(
        weather=WeatherEnrichmentCoordinator(
            provider or StaticProvider(), deadline_seconds=deadline, today=lambda: RIDE_DAY
        ),
        terrain=TerrainClassifier(overpass=StaticOverpass(), sleep=no_sleep),
    )


# =============================================================================
# Test Pipeline
# =============================================================================

class TestPipeline:
    """Full analysis with mocked weather and terrain."""

    def test_result_composition(self, make_gpx, straight_points):
        content = make_gpx(straight_points(11), name="Test Loop")
        result = make_service().analyze_sync(content, rider_weight_kg=70.0)

        assert result.route_name == "Test Loop"
        assert result.metrics.distance_meters == pytest.approx(1000.0, rel=0.01)
        assert result.metrics.average_speed_kmh == pytest.approx(6.0, rel=0.01)
        assert result.weather.has_data
        assert result.terrain.summary.dominant_terrain == TerrainType.PARK
        assert result.calories.rider_weight_kg == 70.0
        assert sum(e.calories for e in result.calories.breakdown) == result.calories.total_calories
        assert sum(e.percentage for e in result.calories.breakdown) == 100

    def test_headwind_applied(self, make_gpx, straight_points):
        """Riding north into a northerly wind costs extra."""
        result = make_service().analyze_sync(make_gpx(straight_points(11)))

        assert result.heading_deg == pytest.approx(0.0, abs=0.01)
        assert result.calories.get_entry(FACTOR_WIND).calories > 0
        assert result.calories.get_entry(FACTOR_ENVIRONMENTAL).calories > 0

    def test_deterministic(self, make_gpx, straight_points):
        content = make_gpx(straight_points(15))
        first = make_service().analyze_sync(content, 72.0)
        second = make_service().analyze_sync(content, 72.0)

        assert first.metrics.model_dump_json() == second.metrics.model_dump_json()
        assert first.calories.model_dump_json() == second.calories.model_dump_json()

    def test_to_dict_is_json_ready(self, make_gpx, straight_points):
        result = make_service().analyze_sync(make_gpx(straight_points(5)))
        payload = result.to_dict()

        json.dumps(payload)
        assert payload["terrain"]["summary"]["dominant_terrain"] == "park"
        assert payload["metrics"]["start_time"].startswith("2024-06-01T08:00:00")

    def test_async_entry_point(self, make_gpx, straight_points):
        result = asyncio.run(make_service().analyze(make_gpx(straight_points(3))))
        assert result.metrics.points_count == 3


# =============================================================================
# Test Degradation
# =============================================================================

class TestDegradation:
    """Enrichment failures never fail the analysis."""

    def test_weather_timeout(self, make_gpx, straight_points):
        service = make_service(provider=StaticProvider(delay=1.0), deadline=0.01)
        result = service.analyze_sync(make_gpx(straight_points(11)), 75.0)

        assert not result.weather.has_data
        assert result.calories.get_entry(FACTOR_WIND).calories == 0
        assert result.calories.get_entry(FACTOR_ENVIRONMENTAL).calories == 0
        assert result.calories.total_calories > 0

    def test_default_service_needs_no_network(self, make_gpx, straight_points):
        """No provider, terrain by elevation only."""
        result = RideAnalysisService().analyze_sync(make_gpx(straight_points(11)))

        assert not result.weather.has_data
        assert result.terrain.remote_classifications == 0
        assert result.terrain.summary.dominant_terrain == TerrainType.RURAL

    def test_mixed_time_offsets(self):
        """Times with and without "Z" in one track still analyze."""
        content = (
            '<?xml version="1.0"?>'
            '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
            '<trk><trkseg>'
            '<trkpt lat="43.0" lon="76.9"><time>2024-06-01T08:00:00Z</time></trkpt>'
            '<trkpt lat="43.01" lon="76.9"><time>2024-06-01T08:10:00</time></trkpt>'
            '</trkseg></trk></gpx>'
        )
        result = RideAnalysisService().analyze_sync(content)

        assert result.metrics.duration_seconds == pytest.approx(600)


# =============================================================================
# Test Wiring
# =============================================================================

class TestFromSettings:
    """Pipeline built from configuration."""

    def test_weather_deadline_from_timeout(self):
        settings = Settings(
            _env_file=None,
            weather_provider="weatherapi",
            weatherapi_api_key="k",
            weather_timeout_seconds=3.0,
        )
        service = RideAnalysisService.from_settings(settings)

        assert service.weather.provider.name == "WeatherAPI"
        assert service.weather.deadline_seconds == 3.0


# =============================================================================
# Test Errors
# =============================================================================

class TestErrors:
    """Fatal input problems reach the caller."""

    def test_single_point(self, make_gpx):
        with pytest.raises(ValidationError):
            make_service().analyze_sync(make_gpx([(43.0, 76.9, 100.0, None)]))

    def test_invalid_document(self):
        with pytest.raises(ParseError):
            make_service().analyze_sync(b"<gpx><broken")


# =============================================================================
# Test Heading
# =============================================================================

class TestHeading:
    """Overall direction of a ride."""

    def test_east(self):
        route = Route(points=(TrackPoint(0.0, 0.0), TrackPoint(0.0, 0.01)))
        assert ride_heading(route) == pytest.approx(90.0)

    def test_loop_has_no_heading(self):
        route = Route(points=(
            TrackPoint(43.0, 76.9),
            TrackPoint(43.01, 76.9),
            TrackPoint(43.0003, 76.9),
        ))
        assert ride_heading(route) is None

    def test_single_point(self):
        assert ride_heading(Route(points=(TrackPoint(43.0, 76.9),))) is None
