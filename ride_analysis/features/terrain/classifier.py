"""
Terrain classification rules.

Two sources:
- OSM tags returned by Overpass (priority landuse > natural > leisure >
  place > highway > surface, first matching rule wins)
- Elevation heuristic when no tag matches or the query failed
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ride_analysis.shared.constants import (
    ClassificationSource,
    REMOTE_CLASSIFICATION_CONFIDENCE,
    TerrainType,
)


@dataclass(frozen=True)
class PointClassification:
    """Terrain type of one sampled point."""
    terrain_type: TerrainType
    confidence: float
    source: ClassificationSource


# Substring rules per OSM key, checked in order
TagRules = List[Tuple[Tuple[str, ...], TerrainType]]

TAG_PRIORITY: List[Tuple[str, TagRules]] = [
    ("landuse", [
        (("residential",), TerrainType.SUBURBAN),
        (("commercial", "retail"), TerrainType.URBAN),
        (("industrial",), TerrainType.INDUSTRIAL),
        (("forest", "wood"), TerrainType.FOREST),
        (("farmland", "farm", "orchard", "vineyard"), TerrainType.RURAL),
        (("meadow", "grass"), TerrainType.GRASSLAND),
        (("reservoir", "basin"), TerrainType.WATER),
    ]),
    ("natural", [
        (("wood", "forest"), TerrainType.FOREST),
        (("water", "lake"), TerrainType.WATER),
        (("beach", "coastline"), TerrainType.COASTAL),
        (("grassland", "heath"), TerrainType.GRASSLAND),
        (("wetland", "marsh"), TerrainType.WETLAND),
        (("sand", "dune"), TerrainType.DESERT),
        (("peak", "ridge", "cliff", "bare_rock", "scree"), TerrainType.MOUNTAIN),
    ]),
    ("leisure", [
        (("park", "garden", "nature_reserve"), TerrainType.PARK),
    ]),
    ("place", [
        (("city", "town"), TerrainType.URBAN),
        (("suburb", "neighbourhood"), TerrainType.SUBURBAN),
        (("village", "hamlet"), TerrainType.RURAL),
    ]),
    ("highway", [
        (("motorway", "trunk"), TerrainType.URBAN),
        (("primary", "secondary"), TerrainType.SUBURBAN),
        (("tertiary", "residential"), TerrainType.SUBURBAN),
        (("unclassified", "service", "track"), TerrainType.RURAL),
    ]),
    ("surface", [
        # "unpaved" contains "paved"
        (("gravel", "dirt", "ground", "unpaved"), TerrainType.RURAL),
        (("paved", "asphalt", "concrete"), TerrainType.URBAN),
        (("sand",), TerrainType.DESERT),
    ]),
]


def _match(value: str, rules: TagRules) -> Optional[TerrainType]:
    value = value.lower()
    for needles, terrain in rules:
        if any(needle in value for needle in needles):
            return terrain
    return None


def classify_elements(elements: Iterable[Mapping[str, Any]]) -> Optional[TerrainType]:
    """
    Classify a point from all Overpass elements found around it.

    Key priority applies across elements: a landuse match on any element
    beats a highway match on another.
    """
    tag_sets = [e.get("tags") or {} for e in elements]

    for key, rules in TAG_PRIORITY:
        for tags in tag_sets:
            value = tags.get(key)
            if isinstance(value, str):
                terrain = _match(value, rules)
                if terrain is not None:
                    return terrain
    return None


def classify_remote(elements: Iterable[Mapping[str, Any]]) -> Optional[PointClassification]:
    """Tag-based classification, None when nothing matched."""
    terrain = classify_elements(elements)
    if terrain is None:
        return None
    return PointClassification(
        terrain_type=terrain,
        confidence=REMOTE_CLASSIFICATION_CONFIDENCE,
        source=ClassificationSource.REMOTE,
    )


def classify_by_elevation(elevation: Optional[float]) -> PointClassification:
    """
    Elevation-only heuristic.

    >2000 m mountain (0.7), >1000 m mountain (0.6), >500 m rural (0.5),
    <50 m coastal (0.4), otherwise rural (0.4). No elevation: unknown (0.2).
    """
    if elevation is None:
        terrain, confidence = TerrainType.UNKNOWN, 0.2
    elif elevation > 2000:
        terrain, confidence = TerrainType.MOUNTAIN, 0.7
    elif elevation > 1000:
        terrain, confidence = TerrainType.MOUNTAIN, 0.6
    elif elevation > 500:
        terrain, confidence = TerrainType.RURAL, 0.5
    elif elevation < 50:
        terrain, confidence = TerrainType.COASTAL, 0.4
    else:
        terrain, confidence = TerrainType.RURAL, 0.4

    return PointClassification(
        terrain_type=terrain,
        confidence=confidence,
        source=ClassificationSource.ELEVATION,
    )
