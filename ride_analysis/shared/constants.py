"""
Unified constants for terrain and weather provider naming.

This module provides a single source of truth for the closed sets of
tags used across the application.
"""

from enum import Enum


class TerrainType(str, Enum):
    """
    Terrain kinds a route point can be classified into.

    Closed set: classification code must map every OSM tag to one of these,
    with UNKNOWN as the only default.
    """
    URBAN = "urban"            # Cities, towns, built-up areas
    SUBURBAN = "suburban"      # Residential areas, outskirts
    RURAL = "rural"            # Countryside, farmland
    FOREST = "forest"
    MOUNTAIN = "mountain"      # High elevation terrain
    COASTAL = "coastal"        # Coastline, beaches
    DESERT = "desert"          # Sand, dunes
    GRASSLAND = "grassland"    # Meadows, heath
    WETLAND = "wetland"        # Marshes, swamps
    INDUSTRIAL = "industrial"
    PARK = "park"              # Parks, gardens
    WATER = "water"            # Lakes, rivers
    UNKNOWN = "unknown"


class WeatherProviderType(str, Enum):
    """Supported weather backends."""
    OPENWEATHERMAP = "openweathermap"
    WEATHERAPI = "weatherapi"
    WEATHERBIT = "weatherbit"
    VISUALCROSSING = "visualcrossing"


class ClassificationSource(str, Enum):
    """Where a sampled point's terrain type came from."""
    REMOTE = "remote"          # Overpass tags matched
    ELEVATION = "elevation"    # Elevation heuristic fallback


# Confidence assigned to a successful tag-based classification.
# Elevation fallbacks always score lower (see terrain.classifier).
REMOTE_CLASSIFICATION_CONFIDENCE = 0.8
