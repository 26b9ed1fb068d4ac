"""
Physiological formulas for calorie estimation.

These formulas are used by the calorie model.
Centralizing them here keeps the constants in one place.
"""

import math
from typing import List, Sequence

GRAVITY_M_S2 = 9.81
JOULES_PER_KCAL = 4184.0

# Gross muscular efficiency of cycling: ~25% of metabolic energy becomes
# mechanical work.
MUSCULAR_EFFICIENCY = 0.25

# (upper speed bound km/h, MET). Compendium of Physical Activities,
# bicycling codes 01010-01066.
MET_BY_SPEED_KMH = [
    (16.0, 4.0),    # leisure, < 10 mph
    (19.0, 6.8),    # 10-11.9 mph, light effort
    (22.0, 8.0),    # 12-13.9 mph, moderate effort
    (25.5, 10.0),   # 14-15.9 mph, vigorous effort
    (30.0, 12.0),   # 16-19 mph, racing / very fast
]
MET_MAX = 15.8      # > 20 mph, racing not drafting


def met_for_speed(speed_kmh: float) -> float:
    """
    Select a MET value from the average-speed bracket.

    Args:
        speed_kmh: Average speed in km/h

    Returns:
        Metabolic equivalent (dimensionless)
    """
    for upper, met in MET_BY_SPEED_KMH:
        if speed_kmh < upper:
            return met
    return MET_MAX


def met_calories(met: float, weight_kg: float, duration_hours: float) -> float:
    """
    Standard MET energy formula: kcal = MET * kg * h.
    """
    if duration_hours <= 0 or weight_kg <= 0:
        return 0.0
    return met * weight_kg * duration_hours


def climbing_calories(weight_kg: float, elevation_gain_m: float) -> float:
    """
    Metabolic cost of lifting the rider against gravity.

    Formula: m * g * h / efficiency / J_per_kcal

    Returns:
        Kilocalories (0 for no climb)
    """
    if elevation_gain_m <= 0 or weight_kg <= 0:
        return 0.0
    work_j = weight_kg * GRAVITY_M_S2 * elevation_gain_m
    return work_j / MUSCULAR_EFFICIENCY / JOULES_PER_KCAL


def apportion(values: Sequence[float], target: int) -> List[int]:
    """
    Round values to integers whose sum is exactly `target`.

    Largest-remainder method: floor everything, then hand the missing
    units to the entries with the largest fractional parts. Ties go to the
    earlier entry, so the result is deterministic.
    """
    if not values:
        return []

    floors = [math.floor(v) for v in values]
    remainder = target - sum(floors)
    order = sorted(
        range(len(values)),
        key=lambda i: (-(values[i] - floors[i]), i)
    )

    result = list(floors)
    if remainder >= 0:
        for k in range(remainder):
            result[order[k % len(order)]] += 1
    else:
        for k in range(-remainder):
            result[order[-1 - (k % len(order))]] -= 1
    return result
