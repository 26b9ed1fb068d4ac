"""
Weather Enrichment Coordinator

Decides between current and historical weather for a ride and degrades to
"no weather data" on any failure.

States:
    NoWeather  - no provider, unsupported date, or a failed call
    Enriched   - provider returned a snapshot
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Optional

from ride_analysis.features.metrics import BoundingBox
from .providers import WeatherProvider
from .schemas import WeatherSnapshot

logger = logging.getLogger(__name__)


def local_date(moment: datetime) -> date:
    """Calendar day of a timestamp in local time (naive = already local)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


class WeatherEnrichmentCoordinator:
    """
    Fetches weather for a ride without ever failing the analysis.

    Usage:
        coordinator = WeatherEnrichmentCoordinator(provider)
        snapshot = await coordinator.enrich(metrics.bounding_box, route.start_time)
    """

    def __init__(
        self,
        provider: Optional[WeatherProvider],
        deadline_seconds: Optional[float] = None,
        today: Callable[[], date] = date.today
    ):
        self.provider = provider
        self.deadline_seconds = deadline_seconds
        self._today = today

    @property
    def provider_name(self) -> Optional[str]:
        return self.provider.name if self.provider else None

    def is_historical(self, ride_date: date, today: Optional[date] = None) -> bool:
        """Ride day is before today (local-day comparison)."""
        return ride_date < (today or self._today())

    async def enrich(
        self,
        bounding_box: BoundingBox,
        ride_start: Optional[datetime]
    ) -> WeatherSnapshot:
        """
        Weather at the route midpoint on the ride date.

        Args:
            bounding_box: Route extent; its center is queried
            ride_start: Recorded start time, None means "today"

        Returns:
            WeatherSnapshot, has_data=False on every failure path
        """
        if self.provider is None or not self.provider.is_configured():
            logger.info("Weather provider not configured, skipping weather enrichment")
            return WeatherSnapshot.no_data(self.provider_name)

        lat, lon = bounding_box.center
        today = self._today()
        ride_date = local_date(ride_start) if ride_start else today

        try:
            if self.is_historical(ride_date, today):
                if not self.provider.supports_date(ride_date, today=today):
                    logger.info(
                        f"Ride date {ride_date.isoformat()} is historical, but "
                        f"{self.provider.name} only supports "
                        f"{self.provider.max_historical_days_supported} days of history"
                    )
                    return WeatherSnapshot.no_data(self.provider_name)

                logger.info(
                    f"Fetching historical weather for ({lat:.4f}, {lon:.4f}) "
                    f"on {ride_date.isoformat()}"
                )
                call = self.provider.historical_weather(lat, lon, ride_date, today=today)
            else:
                logger.debug(f"Fetching current weather for ({lat:.4f}, {lon:.4f})")
                call = self.provider.current_weather(lat, lon)

            if self.deadline_seconds is not None:
                snapshot = await asyncio.wait_for(call, timeout=self.deadline_seconds)
            else:
                snapshot = await call
        except Exception as e:
            logger.warning(f"Weather enrichment failed ({self.provider.name}): {e!r}")
            return WeatherSnapshot.no_data(self.provider_name)

        logger.info(f"Weather data retrieved from {self.provider.name}: {snapshot.condition}")
        return snapshot
