"""
Calorie Model

Multi-factor calorie estimate for a ride:
- base: MET by average-speed bracket x weight x duration
- elevation: work against gravity
- wind: head/tailwind adjustment relative to the ride heading
- environmental: temperature and humidity outside a neutral band

Weather terms are zero when no weather data is available.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ride_analysis.features.metrics import RideMetrics
from ride_analysis.features.weather import WeatherSnapshot
from ride_analysis.shared.formulas import (
    apportion,
    climbing_calories,
    met_calories,
    met_for_speed,
)
from .schemas import CalorieBreakdownEntry, CalorieEstimate

logger = logging.getLogger(__name__)


@dataclass
class CalorieModelConfig:
    """Tunable constants for the calorie model."""
    default_rider_weight_kg: float = 75.0
    wind_resistance_coefficient: float = 0.9

    # Headwind equal to this speed adds max_wind_fraction of base effort
    wind_reference_kmh: float = 50.0
    max_wind_fraction: float = 0.3

    # Neutral band: 15-25 °C, 40-60 % humidity
    neutral_temperature_c: float = 20.0
    temperature_band_c: float = 5.0
    neutral_humidity_percent: float = 50.0
    humidity_band_percent: float = 10.0
    effort_per_degree: float = 0.01
    effort_per_humidity_point: float = 0.002
    max_environmental_fraction: float = 0.2


FACTOR_BASE = "base"
FACTOR_ELEVATION = "elevation"
FACTOR_WIND = "wind"
FACTOR_ENVIRONMENTAL = "environmental"


class CalorieModel:
    """
    Estimates calories burned during a ride.

    Usage:
        model = CalorieModel(CalorieModelConfig(wind_resistance_coefficient=0.9))
        estimate = model.estimate(metrics, 72.0, weather, heading_deg=45.0)
    """

    def __init__(self, config: Optional[CalorieModelConfig] = None):
        self.config = config or CalorieModelConfig()

    def estimate(
        self,
        metrics: RideMetrics,
        rider_weight_kg: Optional[float],
        weather: Optional[WeatherSnapshot],
        heading_deg: Optional[float] = None
    ) -> CalorieEstimate:
        """
        Estimate total calories with a labelled breakdown.

        Args:
            metrics: Ride metrics
            rider_weight_kg: Rider weight; invalid values use the default
            weather: Weather snapshot (has_data may be False)
            heading_deg: Overall ride direction, None if undefined (loops)

        Returns:
            CalorieEstimate whose entries sum to the total
        """
        weight = rider_weight_kg
        if weight is None or weight <= 0:
            weight = self.config.default_rider_weight_kg

        met = met_for_speed(metrics.average_speed_kmh)
        base = met_calories(met, weight, metrics.duration_hours)
        elevation = climbing_calories(weight, metrics.elevation_gain_meters or 0.0)

        wind_fraction = self.wind_fraction(weather, heading_deg)
        wind = base * self.config.wind_resistance_coefficient * wind_fraction

        environmental_fraction = self.environmental_fraction(weather)
        environmental = base * environmental_fraction

        raw: List[Tuple[str, float, str]] = [
            (FACTOR_BASE, base, f"MET {met:.1f} at {metrics.average_speed_kmh:.1f} km/h"),
            (FACTOR_ELEVATION, elevation,
             f"{metrics.elevation_gain_meters or 0:.0f} m climbed"),
            (FACTOR_WIND, wind, f"wind effort {wind_fraction * 100:+.1f}%"),
            (FACTOR_ENVIRONMENTAL, environmental,
             f"heat/humidity effort +{environmental_fraction * 100:.1f}%"),
        ]

        total = int(math.floor(sum(value for _, value, _ in raw) + 0.5))
        calories = apportion([value for _, value, _ in raw], total)

        if total == 0:
            percentages = [100] + [0] * (len(raw) - 1)
        else:
            percentages = apportion([c / total * 100 for c in calories], 100)

        breakdown = [
            CalorieBreakdownEntry(
                factor=factor,
                calories=kcal,
                percentage=pct,
                description=description,
            )
            for (factor, _, description), kcal, pct in zip(raw, calories, percentages)
        ]

        logger.info(
            f"Calories: {total} kcal (base {calories[0]}, elevation {calories[1]}, "
            f"wind {calories[2]}, environmental {calories[3]})"
        )

        return CalorieEstimate(
            total_calories=total,
            rider_weight_kg=weight,
            met_value=met,
            breakdown=breakdown,
        )

    def wind_fraction(
        self,
        weather: Optional[WeatherSnapshot],
        heading_deg: Optional[float]
    ) -> float:
        """
        Share of base effort added by wind, bounded to ±max_wind_fraction.

        Positive for headwind (wind blowing from the direction of travel),
        negative for tailwind.
        """
        if weather is None or not weather.has_data or heading_deg is None:
            return 0.0
        if weather.wind_speed_kmh is None or weather.wind_direction_deg is None:
            return 0.0

        relative = math.radians(weather.wind_direction_deg - heading_deg)
        headwind_kmh = weather.wind_speed_kmh * math.cos(relative)

        limit = self.config.max_wind_fraction
        fraction = headwind_kmh / self.config.wind_reference_kmh
        return max(-limit, min(limit, fraction))

    def environmental_fraction(self, weather: Optional[WeatherSnapshot]) -> float:
        """
        Extra effort from temperature/humidity outside the neutral band.

        Never negative, capped at max_environmental_fraction.
        """
        if weather is None or not weather.has_data:
            return 0.0

        cfg = self.config
        fraction = 0.0

        if weather.temperature_c is not None:
            excess = abs(weather.temperature_c - cfg.neutral_temperature_c) - cfg.temperature_band_c
            fraction += max(0.0, excess) * cfg.effort_per_degree

        if weather.humidity_percent is not None:
            excess = abs(weather.humidity_percent - cfg.neutral_humidity_percent) - cfg.humidity_band_percent
            fraction += max(0.0, excess) * cfg.effort_per_humidity_point

        return min(fraction, cfg.max_environmental_fraction)
