"""
WKT parser tests.

Covers the three supported geometry types, the typed error for each
failure class, and truncated or hostile input.
"""

import pytest

from geojson_api.wkt import (
    parse_wkt,
    Point,
    Polygon,
    MultiPolygon,
    WKTParseError,
    EmptyInputError,
    UnsupportedGeometryTypeError,
    MalformedWKTError,
    InvalidCoordinateError,
)


# ============================================================================
# TestPoint
# ============================================================================

class TestPoint:
    """POINT keeps lon/lat order and exact float values."""

    @pytest.mark.parametrize("lon,lat", [
        (106.8456, -6.2088),
        (0.0, 0.0),
        (-73.5, 45.25),
        (180.0, -90.0),
    ])
    def test_coordinates_preserved(self, lon, lat):
        geometry = parse_wkt(f"POINT({lon} {lat})")
        assert isinstance(geometry, Point)
        assert geometry.to_geojson() == {"type": "Point", "coordinates": [lon, lat]}

    def test_coordinates_are_floats(self):
        geometry = parse_wkt("POINT(106 -6)")
        assert geometry.coordinates == [106.0, -6.0]
        assert all(isinstance(value, float) for value in geometry.coordinates)

    def test_whitespace_tolerated(self):
        assert parse_wkt("  POINT ( 1.5   2.5 )  ").coordinates == [1.5, 2.5]

    def test_exponent_notation(self):
        assert parse_wkt("POINT(1e2 -2.5E-1)").coordinates == [100.0, -0.25]

    def test_three_values_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POINT(1 2 3)")

    def test_one_value_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POINT(1)")

    def test_nested_point_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POINT((1 2))")


# ============================================================================
# TestPolygon
# ============================================================================

class TestPolygon:
    """POLYGON rings keep order and are never repaired."""

    def test_single_ring(self, square_wkt):
        geometry = parse_wkt(square_wkt)
        assert isinstance(geometry, Polygon)
        assert geometry.to_geojson() == {
            "type": "Polygon",
            "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
        }

    def test_hole_is_second_ring(self):
        geometry = parse_wkt(
            "POLYGON((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 3 2, 3 3, 2 2))"
        )
        assert len(geometry.rings) == 2
        assert geometry.coordinates[1][0] == [2.0, 2.0]

    def test_open_ring_passed_through(self):
        geometry = parse_wkt("POLYGON((0 0, 1 0, 1 1))")
        assert geometry.coordinates == [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]]]

    def test_duplicate_points_kept(self):
        geometry = parse_wkt("POLYGON((0 0, 0 0, 1 1, 0 0))")
        assert len(geometry.rings[0]) == 4

    def test_missing_ring_parens_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POLYGON(0 0, 1 0, 1 1, 0 0)")

    def test_too_deep_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POLYGON(((0 0, 1 0, 1 1, 0 0)))")

    def test_empty_ring_element_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("POLYGON((0 0, 1 0, 1 1, 0 0),)")


# ============================================================================
# TestMultiPolygon
# ============================================================================

class TestMultiPolygon:
    """MULTIPOLYGON nesting depth matches the input exactly."""

    def test_nesting_depth(self):
        geometry = parse_wkt(
            "MULTIPOLYGON("
            "((0 0, 4 0, 4 4, 0 4, 0 0), (1 1, 2 1, 2 2, 1 1)),"
            "((10 10, 11 10, 11 11, 10 10))"
            ")"
        )
        assert isinstance(geometry, MultiPolygon)
        assert len(geometry.polygons) == 2
        assert len(geometry.polygons[0].rings) == 2
        assert len(geometry.polygons[1].rings) == 1

    def test_geojson_shape(self):
        geometry = parse_wkt("MULTIPOLYGON(((0 0, 1 0, 1 1, 0 0)))")
        assert geometry.to_geojson() == {
            "type": "MultiPolygon",
            "coordinates": [[[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 0.0]]]],
        }

    def test_polygon_depth_rejected(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt("MULTIPOLYGON((0 0, 1 0, 1 1, 0 0))")


# ============================================================================
# TestErrors
# ============================================================================

class TestErrors:
    """Every failure is a typed WKTParseError."""

    @pytest.mark.parametrize("wkt", [None, "", "   ", "\n\t"])
    def test_empty_input(self, wkt):
        with pytest.raises(EmptyInputError):
            parse_wkt(wkt)

    @pytest.mark.parametrize("wkt", [
        "LINESTRING(0 0, 1 1)",
        "MULTIPOINT((0 0), (1 1))",
        "GEOMETRYCOLLECTION(POINT(0 0))",
        "point(1 2)",
        "(1 2)",
    ])
    def test_unsupported_type(self, wkt):
        with pytest.raises(UnsupportedGeometryTypeError):
            parse_wkt(wkt)

    @pytest.mark.parametrize("token", ["abc", "nan", "inf", "1.2.3", "--1", "0x10"])
    def test_invalid_coordinate(self, token):
        with pytest.raises(InvalidCoordinateError):
            parse_wkt(f"POINT({token} 1)")

    @pytest.mark.parametrize("wkt", [
        "POINT(1e999 1)",
        "POINT(1 -1e400)",
        "POLYGON((0 0, 1e999 0, 1 1, 0 0))",
        "MULTIPOLYGON(((0 0, 1 0, 1 -1e400, 0 0)))",
    ])
    def test_out_of_range_coordinate(self, wkt):
        with pytest.raises(InvalidCoordinateError, match="out of range"):
            parse_wkt(wkt)

    def test_large_finite_coordinate(self):
        assert parse_wkt("POINT(1e308 -1e308)").coordinates == [1e308, -1e308]

    def test_non_string_input(self):
        with pytest.raises(MalformedWKTError):
            parse_wkt(12345)

    def test_error_keeps_input(self):
        with pytest.raises(WKTParseError) as excinfo:
            parse_wkt("LINESTRING(0 0, 1 1)")
        assert excinfo.value.wkt == "LINESTRING(0 0, 1 1)"

    def test_errors_are_value_errors(self):
        assert issubclass(WKTParseError, ValueError)


# ============================================================================
# TestTruncatedInput
# ============================================================================

class TestTruncatedInput:
    """Truncated or hostile strings raise, never crash."""

    @pytest.mark.parametrize("wkt", [
        "POINT",
        "POINT(",
        "POINT(1 2",
        "POINT 1 2)",
        "POINT(1 2))",
        "POINT(1 2) trailing",
        "POLYGON((0 0, 1 0, 1 1, 0 0)",
        "POLYGON((0 0, 1 0, 1 1, 0 0)))",
        "POLYGON((0 0, 1 0, 1 1, 0",
        "MULTIPOLYGON(((0 0, 1 0, 1 1, 0 0))",
        "MULTIPOLYGON(((0 0, 1 0, 1 1, 0 0)) ((2 2, 3 2, 3 3, 2 2)))",
        "POLYGON()",
        "POLYGON(())",
        ")(",
    ])
    def test_truncated(self, wkt):
        with pytest.raises(WKTParseError):
            parse_wkt(wkt)

    def test_deep_nesting_does_not_recurse(self):
        wkt = "POLYGON" + "(" * 5000 + "0 0" + ")" * 5000
        with pytest.raises(MalformedWKTError):
            parse_wkt(wkt)

    def test_long_input_truncated_in_error(self):
        wkt = "LINESTRING(" + "0 0, " * 1000 + "0 0)"
        with pytest.raises(UnsupportedGeometryTypeError) as excinfo:
            parse_wkt(wkt)
        assert len(excinfo.value.wkt) <= 200
