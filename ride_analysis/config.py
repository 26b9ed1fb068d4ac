"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Rider / physics ===
    default_rider_weight_kg: float = Field(
        default=75.0,
        gt=0,
        description="Rider weight used when none is supplied"
    )
    wind_resistance_coefficient: float = Field(
        default=0.9,
        ge=0,
        description="Scales the wind term of the calorie model"
    )

    # === Weather ===
    weather_provider: str = Field(
        default="openweathermap",
        description="One of: openweathermap, weatherapi, weatherbit, visualcrossing"
    )
    openweathermap_api_key: Optional[str] = Field(default=None)
    weatherapi_api_key: Optional[str] = Field(default=None)
    weatherbit_api_key: Optional[str] = Field(default=None)
    visualcrossing_api_key: Optional[str] = Field(default=None)
    weather_timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        description="HTTP timeout for a single weather request"
    )

    # === Terrain (Overpass API, no key required) ===
    overpass_api_url: str = Field(default="https://overpass-api.de/api/interpreter")
    overpass_api_url_secondary: Optional[str] = Field(
        default="https://overpass.kumi.systems/api/interpreter"
    )
    terrain_enable_api_calls: bool = Field(default=True)
    terrain_sample_interval: int = Field(default=10, description="Classify every Nth point")
    terrain_batch_size: int = Field(default=3, description="Concurrent requests per batch")
    terrain_batch_delay_seconds: float = Field(default=2.0, ge=0)
    terrain_request_timeout_seconds: float = Field(default=15.0, gt=0)
    terrain_query_radius_m: int = Field(default=100, gt=0)

    # === Retry ===
    terrain_max_attempts: int = Field(default=3, ge=1)
    terrain_retry_base_delay_seconds: float = Field(default=2.0, ge=0)
    terrain_retry_multiplier: float = Field(default=2.0, ge=1)

    @field_validator('weather_provider')
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Lowercase provider names; unknown names are kept and resolved by the factory."""
        return v.strip().lower()

    @field_validator('terrain_sample_interval', 'terrain_batch_size')
    @classmethod
    def positive_int(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    def api_key_for(self, provider: str) -> Optional[str]:
        """Return the configured credential for a weather provider, if any."""
        return getattr(self, f"{provider}_api_key", None)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
