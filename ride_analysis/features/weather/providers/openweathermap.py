"""
OpenWeatherMap provider.

API Docs: https://openweathermap.org/api
"""

import logging
from datetime import date
from typing import Optional

from ..schemas import (
    WeatherSnapshot,
    DEFAULT_UV_INDEX,
    DEFAULT_PRECIPITATION_CHANCE,
    DEFAULT_VISIBILITY_KM,
)
from .base import WeatherProvider

logger = logging.getLogger(__name__)


class OpenWeatherMapProvider(WeatherProvider):
    """
    OpenWeatherMap current weather.

    The free tier has no time-machine endpoint, so recent historical dates
    are answered with current conditions as the best approximation.
    UV index is not part of the free payload.
    """

    CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"

    @property
    def name(self) -> str:
        return "OpenWeatherMap"

    @property
    def max_historical_days_supported(self) -> int:
        return 5

    async def current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        logger.info(f"Fetching OpenWeatherMap current weather for {lat:.4f}, {lon:.4f}")
        payload = await self._get_json(
            self.CURRENT_URL,
            {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"},
        )
        return self._normalize(self._transform, payload)

    async def historical_weather(
        self, lat: float, lon: float, date_: date, today: Optional[date] = None
    ) -> WeatherSnapshot:
        self._check_history_range(date_, today=today)
        logger.warning(
            "OpenWeatherMap historical weather requires a paid subscription. "
            "Falling back to current weather."
        )
        return await self.current_weather(lat, lon)

    def _transform(self, data: dict) -> WeatherSnapshot:
        main = data["main"]
        wind = data.get("wind") or {}
        weather = data.get("weather") or [{}]
        visibility_m = data.get("visibility")

        return WeatherSnapshot(
            has_data=True,
            provider=self.name,
            temperature_c=float(main["temp"]),
            humidity_percent=float(main["humidity"]),
            wind_speed_kmh=self.ms_to_kmh(float(wind.get("speed", 0.0))),
            wind_direction_deg=wind.get("deg"),
            pressure_hpa=float(main["pressure"]),
            condition=self.capitalize_words(weather[0].get("description", "unknown")),
            visibility_km=visibility_m / 1000 if visibility_m is not None else DEFAULT_VISIBILITY_KM,
            uv_index=DEFAULT_UV_INDEX,
            precipitation_chance=DEFAULT_PRECIPITATION_CHANCE,
        )
