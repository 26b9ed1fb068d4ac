"""
Terrain Classifier

Pipeline: Sampled -> Queried -> Classified -> Merged.

1. Sample every Nth point (first and last always included)
2. Query Overpass per sample in batches: requests inside a batch run
   concurrently, batches run one after another with a delay between them
3. Classify from OSM tags, falling back to elevation
4. Merge consecutive samples of the same type into segments that
   partition the whole point range

Never raises on external failures: the worst case is an elevation-only
analysis.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

import httpx

from ride_analysis.config import Settings
from ride_analysis.features.track import Route, TrackPoint
from ride_analysis.shared.constants import ClassificationSource, TerrainType
from ride_analysis.shared.elevation import average_abs_slope_percent, average_elevation
from ride_analysis.shared.errors import ExternalServiceError
from ride_analysis.shared.geo import step_distances_m
from .classifier import PointClassification, classify_by_elevation, classify_remote
from .overpass import DEFAULT_OVERPASS_URL, OverpassClient
from .retry import RetryPolicy, SleepFunc, call_with_retry
from .schemas import ElevationProfile, TerrainAnalysis, TerrainSegment, TerrainSummary

logger = logging.getLogger(__name__)


# Defaults (overridable via Settings)
SAMPLE_INTERVAL = 10
BATCH_SIZE = 3
BATCH_DELAY_SECONDS = 2.0


class TerrainClassifier:
    """
    Classifies a route into terrain segments.

    Usage:
        classifier = TerrainClassifier.from_settings(settings)
        analysis = await classifier.analyze_route(route)
    """

    def __init__(
        self,
        overpass: Optional[OverpassClient] = None,
        urls: Sequence[str] = (DEFAULT_OVERPASS_URL,),
        sample_interval: int = SAMPLE_INTERVAL,
        batch_size: int = BATCH_SIZE,
        batch_delay_seconds: float = BATCH_DELAY_SECONDS,
        retry_policy: Optional[RetryPolicy] = None,
        enable_api_calls: bool = True,
        sleep: SleepFunc = asyncio.sleep
    ):
        if sample_interval < 1:
            raise ValueError("sample_interval must be >= 1")
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if not urls:
            raise ValueError("at least one Overpass URL is required")

        self.overpass = overpass or OverpassClient()
        self.urls = list(urls)
        self.sample_interval = sample_interval
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self.retry_policy = retry_policy or RetryPolicy()
        self.enable_api_calls = enable_api_calls
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None
    ) -> "TerrainClassifier":
        urls = [settings.overpass_api_url]
        if settings.overpass_api_url_secondary:
            urls.append(settings.overpass_api_url_secondary)

        return cls(
            overpass=OverpassClient(
                timeout=settings.terrain_request_timeout_seconds,
                query_radius_m=settings.terrain_query_radius_m,
                client=client,
            ),
            urls=urls,
            sample_interval=settings.terrain_sample_interval,
            batch_size=settings.terrain_batch_size,
            batch_delay_seconds=settings.terrain_batch_delay_seconds,
            retry_policy=RetryPolicy(
                max_attempts=settings.terrain_max_attempts,
                base_delay_seconds=settings.terrain_retry_base_delay_seconds,
                multiplier=settings.terrain_retry_multiplier,
            ),
            enable_api_calls=settings.terrain_enable_api_calls,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    async def analyze_route(self, route: Route) -> TerrainAnalysis:
        """
        Classify every point of a route into terrain segments.

        Args:
            route: Parsed route (at least one point)

        Returns:
            TerrainAnalysis whose segments cover indices [0, len(route) - 1]
        """
        samples = self.sample_indices(len(route))
        logger.info(
            f"Terrain analysis: {len(route)} points, {len(samples)} samples, "
            f"api_calls={'on' if self.enable_api_calls else 'off'}"
        )

        if self.enable_api_calls:
            try:
                classifications = await self._classify_samples(route, samples)
            except Exception as e:
                logger.error(
                    f"Error during terrain analysis, falling back to elevation-based analysis: {e!r}"
                )
                classifications = self._classify_by_elevation(route, samples)
        else:
            classifications = self._classify_by_elevation(route, samples)

        steps = step_distances_m(route.coords)
        segments = self.build_segments(route, samples, classifications, steps)
        summary = self.summarize(segments)

        remote = sum(1 for c in classifications if c.source == ClassificationSource.REMOTE)
        logger.info(
            f"Terrain analysis complete: {len(segments)} segments, "
            f"dominant {summary.dominant_terrain.value}, "
            f"{remote}/{len(samples)} samples classified from OSM"
        )

        return TerrainAnalysis(
            segments=segments,
            summary=summary,
            elevation_profile=self.elevation_profile(route, steps),
            sampled_points=len(samples),
            remote_classifications=remote,
            fallback_classifications=len(samples) - remote,
        )

    def sample_indices(self, points_count: int) -> List[int]:
        """Every sample_interval-th index plus the last one."""
        if points_count <= 0:
            return []
        indices = list(range(0, points_count, self.sample_interval))
        if indices[-1] != points_count - 1:
            indices.append(points_count - 1)
        return indices

    # =========================================================================
    # Querying
    # =========================================================================

    async def _classify_samples(
        self,
        route: Route,
        samples: List[int]
    ) -> List[PointClassification]:
        results: List[Optional[PointClassification]] = [None] * len(samples)

        for batch_number, start in enumerate(range(0, len(samples), self.batch_size)):
            if batch_number > 0 and self.batch_delay_seconds > 0:
                await self._sleep(self.batch_delay_seconds)

            end = min(start + self.batch_size, len(samples))
            url = self.urls[batch_number % len(self.urls)]
            logger.debug(f"Terrain batch {batch_number + 1}: samples {start}-{end - 1} via {url}")

            batch = await asyncio.gather(*(
                self._classify_point(url, route.points[samples[k]])
                for k in range(start, end)
            ))
            for offset, classification in enumerate(batch):
                results[start + offset] = classification

        return results

    async def _classify_point(self, url: str, point: TrackPoint) -> PointClassification:
        try:
            elements = await call_with_retry(
                lambda: self.overpass.fetch_elements(url, point.latitude, point.longitude),
                self.retry_policy,
                sleep=self._sleep,
                description=f"Overpass ({point.latitude:.5f}, {point.longitude:.5f})",
            )
        except ExternalServiceError:
            return classify_by_elevation(point.elevation)

        return classify_remote(elements) or classify_by_elevation(point.elevation)

    @staticmethod
    def _classify_by_elevation(route: Route, samples: List[int]) -> List[PointClassification]:
        return [classify_by_elevation(route.points[i].elevation) for i in samples]

    # =========================================================================
    # Merging
    # =========================================================================

    @staticmethod
    def build_segments(
        route: Route,
        samples: List[int],
        classifications: List[PointClassification],
        steps: List[float]
    ) -> List[TerrainSegment]:
        """
        Turn per-sample classifications into merged segments.

        Sample k owns indices [s_k, s_(k+1) - 1]; the last sample owns the
        last point. A range's distance is the sum of the steps i -> i+1 it
        owns, so segment distances add up to the route distance.
        """
        elevations = route.elevations
        segments: List[TerrainSegment] = []

        # Running state of the segment being built
        current: Optional[Dict] = None

        def flush():
            distance = current["distance"]
            if distance > 0:
                confidence = current["weighted_confidence"] / distance
            else:
                confidence = sum(current["confidences"]) / len(current["confidences"])
            segments.append(TerrainSegment(
                start_index=current["start"],
                end_index=current["end"],
                distance_meters=distance,
                terrain_type=current["terrain"],
                average_elevation_meters=average_elevation(
                    elevations[current["start"]:current["end"] + 1]
                ),
                confidence=min(1.0, max(0.0, confidence)),
            ))

        for k, (start, classification) in enumerate(zip(samples, classifications)):
            end = samples[k + 1] - 1 if k + 1 < len(samples) else len(route) - 1
            distance = sum(steps[start:min(end + 1, len(steps))])

            if current is not None and current["terrain"] == classification.terrain_type:
                current["end"] = end
                current["distance"] += distance
                current["weighted_confidence"] += classification.confidence * distance
                current["confidences"].append(classification.confidence)
                continue

            if current is not None:
                flush()
            current = {
                "start": start,
                "end": end,
                "terrain": classification.terrain_type,
                "distance": distance,
                "weighted_confidence": classification.confidence * distance,
                "confidences": [classification.confidence],
            }

        if current is not None:
            flush()

        return segments

    @staticmethod
    def summarize(segments: List[TerrainSegment]) -> TerrainSummary:
        """Distance and share of route per terrain type."""
        distribution: Dict[str, float] = {}
        for segment in segments:
            key = segment.terrain_type.value
            distribution[key] = distribution.get(key, 0.0) + segment.distance_meters

        total = sum(distribution.values())
        if total <= 0:
            return TerrainSummary(
                dominant_terrain=TerrainType.UNKNOWN,
                distribution_meters=distribution,
                percentages={key: 0.0 for key in distribution},
            )

        # max() keeps the first type encountered on ties
        dominant = max(distribution, key=lambda key: distribution[key])
        percentages = {
            key: round(distance / total * 100, 2)
            for key, distance in distribution.items()
        }

        return TerrainSummary(
            dominant_terrain=TerrainType(dominant),
            distribution_meters=distribution,
            percentages=percentages,
        )

    @staticmethod
    def elevation_profile(route: Route, steps: List[float]) -> ElevationProfile:
        """Min/max/range of elevation and average absolute slope."""
        known = [e for e in route.elevations if e is not None]
        if not known:
            return ElevationProfile()

        low = min(known)
        high = max(known)
        return ElevationProfile(
            min_meters=low,
            max_meters=high,
            range_meters=high - low,
            average_slope_percent=average_abs_slope_percent(route.elevations, steps),
        )
