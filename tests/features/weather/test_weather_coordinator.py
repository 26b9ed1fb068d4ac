"""
Tests for WeatherEnrichmentCoordinator.

Current vs historical selection and degradation to "no data".
"""

import asyncio
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from ride_analysis.features.metrics import BoundingBox
from ride_analysis.features.weather import (
    WeatherEnrichmentCoordinator,
    WeatherProvider,
    WeatherSnapshot,
    local_date,
)
from ride_analysis.features.weather.providers import WeatherAPIProvider
from ride_analysis.shared.errors import ExternalServiceError


TODAY = date(2024, 6, 10)
BOX = BoundingBox(min_lat=43.0, max_lat=43.2, min_lon=76.8, max_lon=77.0)


class FakeProvider(WeatherProvider):
    """Records calls instead of doing HTTP."""

    def __init__(self, max_days=5, api_key="key", delay=0.0, error=None):
        super().__init__(api_key=api_key)
        self.max_days = max_days
        self.delay = delay
        self.error = error
        self.calls = []

    @property
    def name(self):
        return "Fake"

    @property
    def max_historical_days_supported(self):
        return self.max_days

    async def _answer(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return WeatherSnapshot(
            has_data=True, provider=self.name, temperature_c=20.0,
            humidity_percent=50.0, wind_speed_kmh=10.0, wind_direction_deg=180.0,
            pressure_hpa=1013.0, condition="Clear",
        )

    async def current_weather(self, lat, lon):
        self.calls.append(("current", lat, lon))
        return await self._answer()

    async def historical_weather(self, lat, lon, date_, today=None):
        self.calls.append(("historical", date_))
        return await self._answer()


def enrich(provider, ride_start, deadline=None):
    coordinator = WeatherEnrichmentCoordinator(
        provider, deadline_seconds=deadline, today=lambda: TODAY
    )
    return asyncio.run(coordinator.enrich(BOX, ride_start))


# =============================================================================
# Test Selection
# =============================================================================

class TestSelection:
    """Which provider operation gets called."""

    def test_today_uses_current_only(self):
        provider = FakeProvider()
        snapshot = enrich(provider, datetime(2024, 6, 10, 7, 30))

        assert snapshot.has_data
        assert [c[0] for c in provider.calls] == ["current"]

    def test_midpoint_is_queried(self):
        provider = FakeProvider()
        enrich(provider, datetime(2024, 6, 10, 7, 30))

        _, lat, lon = provider.calls[0]
        assert lat == pytest.approx(43.1)
        assert lon == pytest.approx(76.9)

    def test_no_start_time_means_today(self):
        provider = FakeProvider()
        enrich(provider, None)

        assert [c[0] for c in provider.calls] == ["current"]

    def test_recent_past_uses_history(self):
        provider = FakeProvider(max_days=5)
        snapshot = enrich(provider, datetime(2024, 6, 7, 18, 0))

        assert snapshot.has_data
        assert provider.calls == [("historical", date(2024, 6, 7))]

    def test_beyond_history_depth_makes_no_call(self):
        """10 days back with a 5-day provider: no data, no request."""
        provider = FakeProvider(max_days=5)
        snapshot = enrich(provider, datetime(2024, 5, 31, 9, 0))

        assert not snapshot.has_data
        assert snapshot.temperature_c is None
        assert provider.calls == []

    def test_deep_history_provider(self):
        provider = FakeProvider(max_days=36500)
        snapshot = enrich(provider, datetime(1999, 8, 1, 9, 0))

        assert snapshot.has_data
        assert provider.calls == [("historical", date(1999, 8, 1))]

    def test_backend_checks_range_against_same_today(self):
        """A date accepted against the injected today is fetched by a real backend."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"forecast": {"forecastday": [{
                "day": {
                    "avgtemp_c": 18.0, "avghumidity": 60, "maxwind_kph": 15.0,
                    "condition": {"text": "Sunny"}, "daily_chance_of_rain": 0,
                },
                "hour": [{"wind_degree": 90, "pressure_mb": 1015.0}],
            }]}})

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                provider = WeatherAPIProvider(api_key="k", client=client)
                coordinator = WeatherEnrichmentCoordinator(provider, today=lambda: TODAY)
                return await coordinator.enrich(BOX, datetime(2024, 6, 7, 9, 0))

        snapshot = asyncio.run(run())

        assert snapshot.has_data
        assert snapshot.temperature_c == 18.0
        assert requests[0].url.params["dt"] == "2024-06-07"


# =============================================================================
# Test Degradation
# =============================================================================

class TestDegradation:
    """Failures never propagate."""

    def test_no_provider(self):
        snapshot = enrich(None, datetime(2024, 6, 10, 7, 30))
        assert not snapshot.has_data

    def test_unconfigured_provider(self):
        provider = FakeProvider(api_key=None)
        snapshot = enrich(provider, datetime(2024, 6, 10, 7, 30))

        assert not snapshot.has_data
        assert provider.calls == []

    def test_provider_error(self):
        provider = FakeProvider(error=ExternalServiceError("HTTP 500", status_code=500))
        snapshot = enrich(provider, datetime(2024, 6, 10, 7, 30))

        assert not snapshot.has_data
        assert snapshot.provider == "Fake"

    def test_unexpected_error(self):
        provider = FakeProvider(error=RuntimeError("boom"))
        assert not enrich(provider, None).has_data

    def test_deadline(self):
        provider = FakeProvider(delay=1.0)
        snapshot = enrich(provider, None, deadline=0.01)

        assert not snapshot.has_data


# =============================================================================
# Test Local Date
# =============================================================================

class TestLocalDate:
    """Calendar day of a ride start."""

    def test_naive_is_local(self):
        assert local_date(datetime(2024, 6, 1, 23, 30)) == date(2024, 6, 1)

    def test_aware_converted_to_local(self):
        moment = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        assert local_date(moment) == moment.astimezone().date()

    def test_is_historical(self):
        coordinator = WeatherEnrichmentCoordinator(FakeProvider(), today=lambda: TODAY)

        assert coordinator.is_historical(TODAY - timedelta(days=1))
        assert not coordinator.is_historical(TODAY)
