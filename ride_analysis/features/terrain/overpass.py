"""
Overpass API client.

One query per sampled point: ways within a radius carrying any of the
tags the classifier understands. No API key required.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ride_analysis.shared.errors import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
QUERY_TAGS = ("landuse", "natural", "leisure", "place", "highway", "surface")


class OverpassClient:
    """
    Minimal async Overpass client.

    Usage:
        client = OverpassClient(timeout=15.0, query_radius_m=100)
        elements = await client.fetch_elements(url, 43.25, 76.95)
    """

    def __init__(
        self,
        timeout: float = 15.0,
        query_radius_m: int = 100,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.timeout = timeout
        self.query_radius_m = query_radius_m
        self._client = client

    def build_query(self, lat: float, lon: float) -> str:
        """Overpass QL for tagged ways around a point."""
        # Server-side timeout slightly below the client one
        server_timeout = max(1, int(self.timeout) - 2)
        around = f"around:{self.query_radius_m},{lat:.6f},{lon:.6f}"
        ways = "\n".join(f'  way({around})["{tag}"];' for tag in QUERY_TAGS)
        return f"[out:json][timeout:{server_timeout}];\n(\n{ways}\n);\nout tags;"

    async def fetch_elements(self, url: str, lat: float, lon: float) -> List[Dict[str, Any]]:
        """
        Run the query for one point.

        Returns:
            Overpass elements (possibly empty)

        Raises:
            ExternalServiceError: On timeout, transport error, non-2xx
                (429/504 when Overpass is overloaded) or malformed body
        """
        query = self.build_query(lat, lon)

        try:
            if self._client is not None:
                response = await self._client.post(url, data={"data": query}, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, data={"data": query}, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"Overpass timed out after {self.timeout}s ({url})") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Overpass request failed ({url}): {e}") from e

        if not 200 <= response.status_code < 300:
            raise ExternalServiceError(
                f"Overpass HTTP {response.status_code} ({url})",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalServiceError(f"Overpass response is not JSON ({url})") from e

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise ExternalServiceError(f"Overpass response has no elements list ({url})")

        logger.debug(f"Overpass returned {len(elements)} elements for ({lat:.5f}, {lon:.5f})")
        return elements
