"""
Weather providers.

Available providers:
- OpenWeatherMapProvider: current weather, 5 days "history" (free tier)
- WeatherAPIProvider: 365 days history
- WeatherbitProvider: 730 days history
- VisualCrossingProvider: 36500 days history

Use create_weather_provider() to build the configured one.
"""

import logging
from typing import Optional

import httpx

from ride_analysis.config import Settings
from ride_analysis.shared.constants import WeatherProviderType
from .base import WeatherProvider
from .openweathermap import OpenWeatherMapProvider
from .weatherapi import WeatherAPIProvider
from .weatherbit import WeatherbitProvider
from .visualcrossing import VisualCrossingProvider

logger = logging.getLogger(__name__)


PROVIDER_CLASSES: dict[WeatherProviderType, type[WeatherProvider]] = {
    WeatherProviderType.OPENWEATHERMAP: OpenWeatherMapProvider,
    WeatherProviderType.WEATHERAPI: WeatherAPIProvider,
    WeatherProviderType.WEATHERBIT: WeatherbitProvider,
    WeatherProviderType.VISUALCROSSING: VisualCrossingProvider,
}


def create_weather_provider(
    provider_type: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None
) -> WeatherProvider:
    """
    Build a weather provider from settings.

    Unknown provider names and providers without an API key fall back to
    OpenWeatherMap (which may itself be unconfigured; the coordinator
    then skips enrichment).
    """
    try:
        kind = WeatherProviderType(provider_type)
    except ValueError:
        logger.warning(f"Unknown provider {provider_type}, falling back to OpenWeatherMap")
        kind = WeatherProviderType.OPENWEATHERMAP

    api_key = settings.api_key_for(kind.value)
    if not api_key and kind != WeatherProviderType.OPENWEATHERMAP:
        logger.warning(f"No API key configured for {kind.value}, falling back to OpenWeatherMap")
        kind = WeatherProviderType.OPENWEATHERMAP
        api_key = settings.api_key_for(kind.value)

    provider = PROVIDER_CLASSES[kind](
        api_key=api_key,
        timeout=settings.weather_timeout_seconds,
        client=client,
    )
    logger.info(f"Weather provider: {provider.name} (configured={provider.is_configured()})")
    return provider


__all__ = [
    "WeatherProvider",
    "OpenWeatherMapProvider",
    "WeatherAPIProvider",
    "WeatherbitProvider",
    "VisualCrossingProvider",
    "PROVIDER_CLASSES",
    "create_weather_provider",
]
