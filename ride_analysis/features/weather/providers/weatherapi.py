"""
WeatherAPI.com provider.

API Docs: https://www.weatherapi.com/docs/
"""

import logging
from datetime import date
from typing import Optional

from ride_analysis.shared.geo import circular_mean_deg
from ..schemas import (
    WeatherSnapshot,
    DEFAULT_PRESSURE_HPA,
    DEFAULT_VISIBILITY_KM,
    DEFAULT_UV_INDEX,
    DEFAULT_PRECIPITATION_CHANCE,
)
from .base import WeatherProvider

logger = logging.getLogger(__name__)


class WeatherAPIProvider(WeatherProvider):
    """WeatherAPI.com current and history endpoints (up to 1 year back)."""

    CURRENT_URL = "https://api.weatherapi.com/v1/current.json"
    HISTORY_URL = "https://api.weatherapi.com/v1/history.json"

    @property
    def name(self) -> str:
        return "WeatherAPI"

    @property
    def max_historical_days_supported(self) -> int:
        return 365

    async def current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        logger.info(f"Fetching WeatherAPI current weather for {lat:.4f}, {lon:.4f}")
        payload = await self._get_json(
            self.CURRENT_URL,
            {"key": self.api_key, "q": f"{lat},{lon}", "aqi": "no"},
        )
        return self._normalize(self._transform_current, payload)

    async def historical_weather(
        self, lat: float, lon: float, date_: date, today: Optional[date] = None
    ) -> WeatherSnapshot:
        self._check_history_range(date_, today=today)
        logger.info(
            f"Fetching WeatherAPI history for {lat:.4f}, {lon:.4f} on {date_.isoformat()}"
        )
        payload = await self._get_json(
            self.HISTORY_URL,
            {"key": self.api_key, "q": f"{lat},{lon}", "dt": date_.isoformat()},
        )
        return self._normalize(self._transform_history, payload)

    def _transform_current(self, data: dict) -> WeatherSnapshot:
        current = data["current"]
        return WeatherSnapshot(
            has_data=True,
            provider=self.name,
            temperature_c=float(current["temp_c"]),
            humidity_percent=float(current["humidity"]),
            wind_speed_kmh=float(current["wind_kph"]),
            wind_direction_deg=current.get("wind_degree"),
            pressure_hpa=float(current.get("pressure_mb", DEFAULT_PRESSURE_HPA)),
            condition=current["condition"]["text"],
            visibility_km=float(current.get("vis_km", DEFAULT_VISIBILITY_KM)),
            uv_index=float(current.get("uv") or DEFAULT_UV_INDEX),
            precipitation_chance=DEFAULT_PRECIPITATION_CHANCE,
        )

    def _transform_history(self, data: dict) -> WeatherSnapshot:
        forecast_day = data["forecast"]["forecastday"][0]
        day = forecast_day["day"]
        hours = forecast_day.get("hour") or []

        # Day summary has no wind direction or pressure; derive from hours
        wind_direction = circular_mean_deg(
            h["wind_degree"] for h in hours if h.get("wind_degree") is not None
        )
        pressures = [h["pressure_mb"] for h in hours if h.get("pressure_mb") is not None]
        pressure = sum(pressures) / len(pressures) if pressures else DEFAULT_PRESSURE_HPA

        return WeatherSnapshot(
            has_data=True,
            provider=self.name,
            temperature_c=float(day["avgtemp_c"]),
            humidity_percent=float(day["avghumidity"]),
            wind_speed_kmh=float(day["maxwind_kph"]),
            wind_direction_deg=wind_direction,
            pressure_hpa=float(pressure),
            condition=day["condition"]["text"],
            visibility_km=float(day.get("avgvis_km", DEFAULT_VISIBILITY_KM)),
            uv_index=float(day.get("uv") or DEFAULT_UV_INDEX),
            precipitation_chance=float(day.get("daily_chance_of_rain") or 0),
        )
