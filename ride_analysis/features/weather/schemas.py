"""
Weather schemas.

Canonical snapshot every provider normalises into.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


# Neutral placeholders for fields a provider does not report
DEFAULT_PRESSURE_HPA = 1013.0
DEFAULT_VISIBILITY_KM = 10.0
DEFAULT_UV_INDEX = 0.0
DEFAULT_PRECIPITATION_CHANCE = 0.0


class WeatherSnapshot(BaseModel):
    """
    Weather at the time and place of a ride.

    has_data=False is a valid terminal state: every numeric field is None
    and consumers must treat the snapshot as "no weather".
    """

    model_config = ConfigDict(frozen=True)

    has_data: bool
    provider: Optional[str] = None

    temperature_c: Optional[float] = None
    humidity_percent: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    # Direction the wind blows FROM, meteorological convention
    wind_direction_deg: Optional[float] = None
    pressure_hpa: Optional[float] = None
    condition: Optional[str] = None

    visibility_km: Optional[float] = None
    uv_index: Optional[float] = None
    precipitation_chance: Optional[float] = None

    @classmethod
    def no_data(cls, provider: Optional[str] = None) -> "WeatherSnapshot":
        return cls(has_data=False, provider=provider)
