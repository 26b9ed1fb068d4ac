"""
Calorie estimate schemas.
"""

from typing import List

from pydantic import BaseModel, ConfigDict


class CalorieBreakdownEntry(BaseModel):
    """One labelled contribution to the calorie total."""

    model_config = ConfigDict(frozen=True)

    factor: str
    calories: int        # may be negative for adjustments (tailwind)
    percentage: int      # share of the grand total
    description: str = ""


class CalorieEstimate(BaseModel):
    """Total calories with its breakdown."""

    model_config = ConfigDict(frozen=True)

    total_calories: int
    rider_weight_kg: float
    met_value: float
    breakdown: List[CalorieBreakdownEntry]

    def get_entry(self, factor: str) -> CalorieBreakdownEntry | None:
        """Get the breakdown entry for a factor."""
        for entry in self.breakdown:
            if entry.factor == factor:
                return entry
        return None
