"""
Calorie estimation module.

Components:
- CalorieModel / CalorieModelConfig: multi-factor estimate
- CalorieEstimate / CalorieBreakdownEntry: result schemas
"""

from .model import (
    CalorieModel,
    CalorieModelConfig,
    FACTOR_BASE,
    FACTOR_ELEVATION,
    FACTOR_WIND,
    FACTOR_ENVIRONMENTAL,
)
from .schemas import CalorieBreakdownEntry, CalorieEstimate

__all__ = [
    "CalorieModel",
    "CalorieModelConfig",
    "CalorieBreakdownEntry",
    "CalorieEstimate",
    "FACTOR_BASE",
    "FACTOR_ELEVATION",
    "FACTOR_WIND",
    "FACTOR_ENVIRONMENTAL",
]
