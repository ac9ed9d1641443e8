# ============================================================================
# CLAUDE CONTEXT - GEOJSON FEATURE ASSEMBLER
# ============================================================================
# STATUS: Standalone Schema - Feature / FeatureCollection assembly
# PURPOSE: Combine parsed WKT geometry with row attributes into GeoJSON features
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Feature, FeatureCollection, SkippedFeature, AssemblyResult, build_feature, build_feature_collection, collect_features
# INTERFACES: Frozen dataclasses with to_dict()
# DEPENDENCIES: dataclasses, typing, geojson_api.wkt
# SOURCE: (wkt, properties) pairs built by the layer service from query rows
# SCOPE: Stateless assembly, no I/O
# PATTERNS: Fold with explicit partial-failure result
# ENTRY_POINTS: from geojson_api.features import collect_features
# ============================================================================

"""
GeoJSON Feature Assembler

``build_feature`` parses one WKT string and pairs the geometry with a
caller-supplied property mapping. ``build_feature_collection`` wraps
features in a FeatureCollection without sorting or filtering.

``collect_features`` is the bulk entry point used by the map layers. A row
whose geometry cannot be parsed is recorded in ``AssemblyResult.skipped``
and the remaining rows are still assembled, so one bad geometry never
takes down a whole layer.

Property values are expected to be JSON scalars (str, int, float, None).
They are stored as given and never validated.

Date: 18 OCT 2026
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .wkt import Geometry, WKTParseError, parse_wkt

PropertyValue = Union[str, int, float, None]
Properties = Mapping[str, PropertyValue]


@dataclass(frozen=True)
class Feature:
    """
    GeoJSON Feature.

    ``properties`` is the caller's mapping itself, not a copy, so key order
    is whatever the caller built.
    """
    geometry: Geometry
    properties: Properties
    type: str = field(default="Feature", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "geometry": self.geometry.to_geojson(),
            "properties": dict(self.properties)
        }


@dataclass(frozen=True)
class FeatureCollection:
    """GeoJSON FeatureCollection; features keep append order."""
    features: Tuple[Feature, ...] = ()
    type: str = field(default="FeatureCollection", init=False)

    def __len__(self) -> int:
        return len(self.features)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "features": [feature.to_dict() for feature in self.features]
        }


@dataclass(frozen=True)
class SkippedFeature:
    """A source row whose geometry could not be parsed."""
    index: int
    feature_id: Optional[PropertyValue]
    error: WKTParseError

    @property
    def error_type(self) -> str:
        return type(self.error).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "feature_id": self.feature_id,
            "error_type": self.error_type,
            "error_message": str(self.error)
        }


@dataclass(frozen=True)
class AssemblyResult:
    """Collection built from the good rows plus the rows that were skipped."""
    collection: FeatureCollection
    skipped: Tuple[SkippedFeature, ...] = ()

    @property
    def feature_count(self) -> int:
        return len(self.collection)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def build_feature(wkt: Optional[str], properties: Properties) -> Feature:
    """
    Build one Feature from WKT and properties.

    Raises:
        WKTParseError: propagated unchanged from the parser
    """
    return Feature(geometry=parse_wkt(wkt), properties=properties)


def build_feature_collection(features: Iterable[Feature]) -> FeatureCollection:
    """Wrap features in a FeatureCollection. Never fails, empty input included."""
    return FeatureCollection(features=tuple(features))


def collect_features(
    rows: Iterable[Tuple[Optional[str], Properties]],
    id_key: str = "id"
) -> AssemblyResult:
    """
    Assemble a FeatureCollection, skipping rows with unparseable geometry.

    Args:
        rows: (wkt, properties) pairs in output order
        id_key: property used to identify skipped rows

    Returns:
        AssemblyResult with the collection and one SkippedFeature per bad row
    """
    features: List[Feature] = []
    skipped: List[SkippedFeature] = []

    for index, (wkt, properties) in enumerate(rows):
        try:
            features.append(build_feature(wkt, properties))
        except WKTParseError as e:
            skipped.append(SkippedFeature(
                index=index,
                feature_id=properties.get(id_key),
                error=e
            ))

    return AssemblyResult(
        collection=build_feature_collection(features),
        skipped=tuple(skipped)
    )
