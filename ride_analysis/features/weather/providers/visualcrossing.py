"""
Visual Crossing provider.

API Docs: https://www.visualcrossing.com/resources/documentation/weather-api/
"""

import logging
from datetime import date
from typing import Optional

from ..schemas import (
    WeatherSnapshot,
    DEFAULT_PRESSURE_HPA,
    DEFAULT_VISIBILITY_KM,
    DEFAULT_UV_INDEX,
)
from .base import WeatherProvider

logger = logging.getLogger(__name__)


class VisualCrossingProvider(WeatherProvider):
    """Visual Crossing timeline API: current conditions and 100 years of history."""

    TIMELINE_URL = (
        "https://weather.visualcrossing.com/VisualCrossingWebServices"
        "/rest/services/timeline"
    )

    @property
    def name(self) -> str:
        return "VisualCrossing"

    @property
    def max_historical_days_supported(self) -> int:
        return 36500

    async def current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        logger.info(f"Fetching Visual Crossing current weather for {lat:.4f}, {lon:.4f}")
        payload = await self._get_json(
            f"{self.TIMELINE_URL}/{lat},{lon}",
            {
                "unitGroup": "metric",
                "key": self.api_key,
                "contentType": "json",
                "include": "current",
            },
        )
        return self._normalize(lambda d: self._transform(d["currentConditions"]), payload)

    async def historical_weather(
        self, lat: float, lon: float, date_: date, today: Optional[date] = None
    ) -> WeatherSnapshot:
        self._check_history_range(date_, today=today)
        day = date_.isoformat()
        logger.info(
            f"Fetching Visual Crossing history for {lat:.4f}, {lon:.4f} on {day}"
        )
        payload = await self._get_json(
            f"{self.TIMELINE_URL}/{lat},{lon}/{day}/{day}",
            {
                "unitGroup": "metric",
                "key": self.api_key,
                "contentType": "json",
                "include": "days",
            },
        )
        return self._normalize(lambda d: self._transform(d["days"][0]), payload)

    def _transform(self, entry: dict) -> WeatherSnapshot:
        return WeatherSnapshot(
            has_data=True,
            provider=self.name,
            temperature_c=float(entry["temp"]),
            humidity_percent=float(entry["humidity"]),
            wind_speed_kmh=float(entry["windspeed"]),
            wind_direction_deg=entry.get("winddir"),
            pressure_hpa=float(entry.get("pressure") or DEFAULT_PRESSURE_HPA),
            condition=entry.get("conditions") or "Unknown",
            visibility_km=float(entry.get("visibility") or DEFAULT_VISIBILITY_KM),
            uv_index=float(entry.get("uvindex") or DEFAULT_UV_INDEX),
            precipitation_chance=float(entry.get("precipprob") or 0),
        )
