# ============================================================================
# CLAUDE CONTEXT - GEOJSON LAYER API MODULE
# ============================================================================
# STATUS: Standalone Module - admin map layers
# PURPOSE: WKT -> GeoJSON assembly for kecamatan, kelurahan and balita layers
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: parse_wkt, build_feature, build_feature_collection, collect_features, classify_color, GeoJSONLayerService, get_geojson_triggers
# DEPENDENCIES: psycopg, pydantic, azure-functions
# SOURCE: Environment variables for PostGIS connection
# PATTERNS: Service Layer, Repository Pattern, Standalone Module
# ENTRY_POINTS: from geojson_api import get_geojson_triggers
# ============================================================================

"""
GeoJSON Layer API

Architecture:
    geojson_api/
    ├── wkt.py             # WKT parser and geometry values
    ├── features.py        # Feature / FeatureCollection assembly
    ├── classification.py  # Balita status -> legend color
    ├── config.py          # Environment-based layer settings
    ├── models.py          # Pydantic query models and response envelope
    ├── repository.py      # PostGIS row queries (psycopg)
    ├── service.py         # Row -> feature mapping per layer
    └── triggers.py        # Azure Functions HTTP handlers

The parser, assembler and classifier have no I/O and can be imported on
their own. Importing this package pulls in the triggers and therefore
azure-functions.
"""

from .wkt import (
    parse_wkt,
    Point,
    Polygon,
    MultiPolygon,
    WKTParseError,
    EmptyInputError,
    UnsupportedGeometryTypeError,
    MalformedWKTError,
    InvalidCoordinateError
)
from .features import (
    Feature,
    FeatureCollection,
    AssemblyResult,
    SkippedFeature,
    build_feature,
    build_feature_collection,
    collect_features
)
from .classification import classify_color
from .config import GeoJSONConfig, get_geojson_config
from .service import GeoJSONLayerService
from .triggers import get_geojson_triggers

__version__ = "1.0.0"
__all__ = [
    "parse_wkt",
    "Point",
    "Polygon",
    "MultiPolygon",
    "WKTParseError",
    "EmptyInputError",
    "UnsupportedGeometryTypeError",
    "MalformedWKTError",
    "InvalidCoordinateError",
    "Feature",
    "FeatureCollection",
    "AssemblyResult",
    "SkippedFeature",
    "build_feature",
    "build_feature_collection",
    "collect_features",
    "classify_color",
    "GeoJSONConfig",
    "get_geojson_config",
    "GeoJSONLayerService",
    "get_geojson_triggers"
]
