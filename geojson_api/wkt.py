# ============================================================================
# CLAUDE CONTEXT - WKT GEOMETRY PARSER
# ============================================================================
# STATUS: Standalone Schema - WKT to geometry transcoder
# PURPOSE: Parse POINT / POLYGON / MULTIPOLYGON Well-Known-Text into geometry values
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: parse_wkt, Point, Polygon, MultiPolygon, Geometry, WKTParseError (+ subclasses)
# INTERFACES: Frozen dataclasses with to_geojson()
# DEPENDENCIES: dataclasses, math, re, typing
# SOURCE: ST_AsText() output from the spatial database
# SCOPE: Syntactic transcoding only - no geometric validation
# PATTERNS: Fixed-depth, non-recursive peeling of parenthesis levels
# ENTRY_POINTS: from geojson_api.wkt import parse_wkt
# ============================================================================

"""
WKT Geometry Parser

Converts the text produced by ``ST_AsText()`` into immutable geometry values
that know how to render themselves as GeoJSON geometry objects.

Supported types (case-sensitive keywords):
- POINT(lon lat)
- POLYGON((lon lat, ...), (lon lat, ...))
- MULTIPOLYGON(((lon lat, ...)), ((lon lat, ...), (lon lat, ...)))

Parsing peels one matched pair of parentheses per nesting level:
MULTIPOLYGON -> polygon bodies -> rings -> comma separated pairs ->
whitespace separated numbers.

The parser never repairs input. Ring closure, winding order and
simplicity pass through untouched, as does coordinate order (longitude
first, no axis swap).

Every failure raises a ``WKTParseError`` subclass; no other exception type
escapes ``parse_wkt`` for string input.

Date: 18 OCT 2026
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union


# ============================================================================
# ERRORS
# ============================================================================

class WKTParseError(ValueError):
    """
    Base class for WKT parsing failures.

    Attributes:
        wkt: The offending input (truncated for log safety)
    """

    def __init__(self, message: str, wkt: Optional[str] = None):
        super().__init__(message)
        self.wkt = wkt[:200] if isinstance(wkt, str) else wkt


class EmptyInputError(WKTParseError):
    """Input is None, empty, or whitespace only."""


class UnsupportedGeometryTypeError(WKTParseError):
    """Leading keyword is not POINT, POLYGON or MULTIPOLYGON."""


class MalformedWKTError(WKTParseError):
    """Parenthesis structure or coordinate pair shape is wrong."""


class InvalidCoordinateError(WKTParseError):
    """A coordinate token is not a decimal number."""


# ============================================================================
# GEOMETRY VALUES
# ============================================================================

Position = Tuple[float, float]
Ring = Tuple[Position, ...]


@dataclass(frozen=True)
class Point:
    """Single position, longitude first."""
    longitude: float
    latitude: float

    geojson_type = "Point"

    @property
    def coordinates(self) -> List[float]:
        return [self.longitude, self.latitude]

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": self.geojson_type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class Polygon:
    """
    Polygon as an ordered sequence of rings.

    The first ring is the exterior boundary, any further rings are holes.
    """
    rings: Tuple[Ring, ...]

    geojson_type = "Polygon"

    @property
    def coordinates(self) -> List[List[List[float]]]:
        return [[[lon, lat] for lon, lat in ring] for ring in self.rings]

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": self.geojson_type, "coordinates": self.coordinates}


@dataclass(frozen=True)
class MultiPolygon:
    """Ordered sequence of polygons."""
    polygons: Tuple[Polygon, ...]

    geojson_type = "MultiPolygon"

    @property
    def coordinates(self) -> List[List[List[List[float]]]]:
        return [polygon.coordinates for polygon in self.polygons]

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": self.geojson_type, "coordinates": self.coordinates}


Geometry = Union[Point, Polygon, MultiPolygon]


# ============================================================================
# PARSER
# ============================================================================

_KEYWORD = re.compile(r"[A-Za-z]+")

# WKT decimal: optional sign, digits with optional fraction (or bare fraction), optional exponent
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_wkt(wkt: Optional[str]) -> Geometry:
    """
    Parse a WKT string into a geometry value.

    Args:
        wkt: Text such as ``POINT(106.8 -6.2)``

    Returns:
        Point, Polygon or MultiPolygon

    Raises:
        EmptyInputError: None, empty or whitespace-only input
        UnsupportedGeometryTypeError: keyword other than the three supported
        MalformedWKTError: wrong nesting depth, unbalanced parentheses, bad pair shape
        InvalidCoordinateError: non-numeric coordinate token
    """
    if wkt is None:
        raise EmptyInputError("WKT input is missing")
    if not isinstance(wkt, str):
        raise MalformedWKTError(f"WKT input must be text, got {type(wkt).__name__}")
    if not wkt.strip():
        raise EmptyInputError("WKT input is empty", wkt)

    text = wkt.strip()
    match = _KEYWORD.match(text)
    if not match:
        raise UnsupportedGeometryTypeError("WKT does not start with a geometry type", wkt)

    keyword = match.group(0)
    body = text[match.end():].strip()

    if keyword == "POINT":
        return _parse_point(body, wkt)
    if keyword == "POLYGON":
        return _parse_polygon(body, wkt)
    if keyword == "MULTIPOLYGON":
        return _parse_multipolygon(body, wkt)

    raise UnsupportedGeometryTypeError(f"Unsupported WKT geometry type '{keyword}'", wkt)


def _parse_point(body: str, wkt: str) -> Point:
    inner = _strip_parens(body, wkt)
    if "(" in inner or ")" in inner:
        raise MalformedWKTError("POINT takes a single coordinate pair", wkt)
    longitude, latitude = _parse_position(inner, wkt)
    return Point(longitude=longitude, latitude=latitude)


def _parse_polygon(body: str, wkt: str) -> Polygon:
    rings = tuple(_parse_ring(ring, wkt) for ring in _split_level(_strip_parens(body, wkt), wkt))
    return Polygon(rings=rings)


def _parse_multipolygon(body: str, wkt: str) -> MultiPolygon:
    polygons = tuple(_parse_polygon(part, wkt) for part in _split_level(_strip_parens(body, wkt), wkt))
    return MultiPolygon(polygons=polygons)


def _parse_ring(text: str, wkt: str) -> Ring:
    inner = _strip_parens(text, wkt)
    if "(" in inner or ")" in inner:
        raise MalformedWKTError("Ring nested deeper than expected", wkt)
    return tuple(_parse_position(pair, wkt) for pair in inner.split(","))


def _parse_position(pair: str, wkt: str) -> Position:
    tokens = pair.split()
    if len(tokens) != 2:
        raise MalformedWKTError(
            f"Coordinate pair must have exactly 2 values, got {len(tokens)}: '{pair.strip()[:50]}'",
            wkt
        )
    return _parse_number(tokens[0], wkt), _parse_number(tokens[1], wkt)


def _parse_number(token: str, wkt: str) -> float:
    if not _NUMBER.fullmatch(token):
        raise InvalidCoordinateError(f"Invalid coordinate value '{token[:50]}'", wkt)
    value = float(token)
    if not math.isfinite(value):
        raise InvalidCoordinateError(f"Coordinate value out of range '{token[:50]}'", wkt)
    return value


def _strip_parens(text: str, wkt: str) -> str:
    """
    Remove one pair of outer parentheses.

    The opening parenthesis at the start must be closed by the last
    character; anything else is a nesting error.
    """
    text = text.strip()
    if not text.startswith("(") or not text.endswith(")"):
        raise MalformedWKTError("Expected a parenthesised list", wkt)

    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and index != len(text) - 1:
                raise MalformedWKTError("Unexpected text after closing parenthesis", wkt)
    if depth != 0:
        raise MalformedWKTError("Unbalanced parentheses", wkt)

    return text[1:-1]


def _split_level(text: str, wkt: str) -> List[str]:
    """Split on commas that sit at parenthesis depth zero."""
    parts = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])

    for part in parts:
        if not part.strip():
            raise MalformedWKTError("Empty element in parenthesised list", wkt)
    return parts
