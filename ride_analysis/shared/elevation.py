"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
Elevation lists may contain None for points recorded without altitude;
those points are skipped rather than treated as sea level.
"""
from typing import List, Optional, Sequence, Tuple


def calculate_elevation_changes(
    elevations: Sequence[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Args:
        elevations: Elevation values in recording order (None allowed)

    Returns:
        Tuple of (gain_m, loss_m)
    """
    known = [e for e in elevations if e is not None]
    gain = 0.0
    loss = 0.0

    for i in range(1, len(known)):
        diff = known[i] - known[i - 1]
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss


def average_elevation(elevations: Sequence[Optional[float]]) -> Optional[float]:
    """Mean of the known elevations, None if there are none."""
    known = [e for e in elevations if e is not None]
    if not known:
        return None
    return sum(known) / len(known)


def average_abs_slope_percent(
    elevations: Sequence[Optional[float]],
    step_distances_m: Sequence[float]
) -> float:
    """
    Average absolute slope over steps where both ends have elevation.

    Args:
        elevations: Per-point elevations (None allowed)
        step_distances_m: Distance of step i -> i+1, len(elevations) - 1 items

    Returns:
        Average slope in percent (0 when nothing can be measured)
    """
    slopes: List[float] = []
    for i, distance in enumerate(step_distances_m):
        e1 = elevations[i]
        e2 = elevations[i + 1]
        if e1 is None or e2 is None or distance <= 0:
            continue
        slopes.append(abs((e2 - e1) / distance) * 100)

    if not slopes:
        return 0.0
    return sum(slopes) / len(slopes)
