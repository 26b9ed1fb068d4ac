"""
Weatherbit.io provider.

API Docs: https://www.weatherbit.io/api
"""

import logging
from datetime import date, timedelta
from typing import Optional

from ..schemas import (
    WeatherSnapshot,
    DEFAULT_PRESSURE_HPA,
    DEFAULT_VISIBILITY_KM,
    DEFAULT_UV_INDEX,
)
from .base import WeatherProvider

logger = logging.getLogger(__name__)


class WeatherbitProvider(WeatherProvider):
    """Weatherbit current and daily history endpoints (up to 2 years back)."""

    CURRENT_URL = "https://api.weatherbit.io/v2.0/current"
    HISTORY_URL = "https://api.weatherbit.io/v2.0/history/daily"

    @property
    def name(self) -> str:
        return "WeatherBit"

    @property
    def max_historical_days_supported(self) -> int:
        return 730

    async def current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        logger.info(f"Fetching Weatherbit current weather for {lat:.4f}, {lon:.4f}")
        payload = await self._get_json(
            self.CURRENT_URL,
            {"lat": lat, "lon": lon, "key": self.api_key, "units": "M"},
        )
        return self._normalize(self._transform, payload)

    async def historical_weather(
        self, lat: float, lon: float, date_: date, today: Optional[date] = None
    ) -> WeatherSnapshot:
        self._check_history_range(date_, today=today)
        logger.info(
            f"Fetching Weatherbit history for {lat:.4f}, {lon:.4f} on {date_.isoformat()}"
        )
        # end_date is exclusive for the daily history endpoint
        payload = await self._get_json(
            self.HISTORY_URL,
            {
                "lat": lat,
                "lon": lon,
                "start_date": date_.isoformat(),
                "end_date": (date_ + timedelta(days=1)).isoformat(),
                "key": self.api_key,
                "units": "M",
            },
        )
        return self._normalize(self._transform, payload)

    def _transform(self, data: dict) -> WeatherSnapshot:
        entry = data["data"][0]
        # Daily history rows carry no "weather" description block
        description = (entry.get("weather") or {}).get("description", "Unknown")

        return WeatherSnapshot(
            has_data=True,
            provider=self.name,
            temperature_c=float(entry["temp"]),
            humidity_percent=float(entry["rh"]),
            wind_speed_kmh=self.ms_to_kmh(float(entry["wind_spd"])),
            wind_direction_deg=entry.get("wind_dir"),
            pressure_hpa=float(entry.get("pres") or DEFAULT_PRESSURE_HPA),
            condition=description,
            visibility_km=float(entry.get("vis") or DEFAULT_VISIBILITY_KM),
            uv_index=float(entry.get("uv") or entry.get("max_uv") or DEFAULT_UV_INDEX),
            precipitation_chance=float(entry.get("pop") or 0),
        )
