"""
Base Weather Provider

Abstract base class for all weather backends.
Callers depend on this interface and its capability queries
(max_historical_days_supported, is_configured), never on a concrete backend.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional

import httpx

from ride_analysis.shared.errors import ConfigurationError, ExternalServiceError
from ..schemas import WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 8.0


class WeatherProvider(ABC):
    """
    Abstract base class for weather providers.

    Each provider wraps one third-party API and normalises its payload
    into a WeatherSnapshot.
    """

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for display and logging."""
        pass

    @property
    @abstractmethod
    def max_historical_days_supported(self) -> int:
        """How many days back historical data is available. 0 = none."""
        pass

    @abstractmethod
    async def current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        """
        Current conditions at a location.

        Raises:
            ExternalServiceError: On timeout, non-2xx or unusable payload
        """
        pass

    @abstractmethod
    async def historical_weather(
        self,
        lat: float,
        lon: float,
        date_: date,
        today: Optional[date] = None
    ) -> WeatherSnapshot:
        """
        Observed conditions on a past calendar day.

        Args:
            today: Reference day for the range check, defaults to date.today()

        Raises:
            ExternalServiceError: On failure or when the date is out of range
        """
        pass

    def is_configured(self) -> bool:
        """True only if the provider's credential is present."""
        return bool(self.api_key and self.api_key.strip())

    def supports_date(self, date_: date, today: Optional[date] = None) -> bool:
        """
        Check whether historical data is available for a date.

        Compares calendar days in local time: a ride from yesterday is
        1 day back regardless of the hour it was recorded. Today itself
        is not history.
        """
        if self.max_historical_days_supported <= 0:
            return False

        today = today or date.today()
        days_back = (today - date_).days
        return 0 < days_back <= self.max_historical_days_supported

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------

    async def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        """
        GET a JSON document.

        Uses the injected client if there is one, otherwise a short-lived
        AsyncClient per request.

        Raises:
            ConfigurationError: If no API key is configured
            ExternalServiceError: On transport errors, timeouts, non-2xx
                responses or non-JSON bodies
        """
        if not self.is_configured():
            raise ConfigurationError(f"{self.name}: API key not configured")

        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(
                f"{self.name}: request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"{self.name}: request failed: {e}") from e

        if response.status_code != 200:
            raise ExternalServiceError(
                f"{self.name}: HTTP {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(f"{self.name}: response is not JSON") from e

    def _normalize(self, build, payload: Any) -> WeatherSnapshot:
        """Run a payload transformer, turning shape errors into ExternalServiceError."""
        try:
            return build(payload)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"{self.name}: unexpected payload shape: {e!r}")
            raise ExternalServiceError(f"{self.name}: unexpected payload: {e!r}") from e

    def _check_history_range(self, date_: date, today: Optional[date] = None) -> None:
        if not self.supports_date(date_, today=today):
            raise ExternalServiceError(
                f"{self.name} history only supports last "
                f"{self.max_historical_days_supported} days. "
                f"Date {date_.isoformat()} is out of range."
            )

    # -------------------------------------------------------------------------
    # Unit helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def ms_to_kmh(ms: float) -> float:
        """Convert meters per second to kilometers per hour."""
        return ms * 3.6

    @staticmethod
    def capitalize_words(text: str) -> str:
        """'light rain' -> 'Light Rain'."""
        return " ".join(word.capitalize() for word in text.split(" "))
