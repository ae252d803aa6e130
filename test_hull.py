"""
Test Hull Reduction
===================

Degenerate-case policy and canonical output of compute_convex_hull.

Usage:
    pytest test_hull.py
"""

import math
import random

import numpy as np
import pytest
from shapely.geometry import LinearRing, MultiPoint, Point, Polygon

from geohull.geometry import Coordinate, GeometryType, HullGeometry, compute_convex_hull


def coords(*pairs):
    return {Coordinate(float(lon), float(lat)) for lon, lat in pairs}


def as_pairs(geometry):
    return [c.as_tuple() for c in geometry.coordinates]


def test_no_points_is_absent():
    assert compute_convex_hull(set()) is None


def test_single_point():
    hull = compute_convex_hull(coords((2.0, 3.0)))

    assert hull.type == GeometryType.POINT
    assert as_pairs(hull) == [(2.0, 3.0)]


def test_two_points_is_line():
    hull = compute_convex_hull(coords((1, 1), (0, 0)))

    assert hull.type == GeometryType.LINE
    assert as_pairs(hull) == [(0.0, 0.0), (1.0, 1.0)]


def test_collinear_points_keep_extremes_only():
    hull = compute_convex_hull(coords((0, 0), (1, 1), (2, 2)))

    assert hull.type == GeometryType.LINE
    assert as_pairs(hull) == [(0.0, 0.0), (2.0, 2.0)]


def test_vertical_collinear_points():
    hull = compute_convex_hull(coords((1, 2), (1, 0), (1, 5), (1, 3)))

    assert hull.type == GeometryType.LINE
    assert as_pairs(hull) == [(1.0, 0.0), (1.0, 5.0)]


def test_horizontal_collinear_points():
    hull = compute_convex_hull(coords((3, 7), (-2, 7), (0, 7)))

    assert hull.type == GeometryType.LINE
    assert as_pairs(hull) == [(-2.0, 7.0), (3.0, 7.0)]


def test_unit_square_with_center():
    hull = compute_convex_hull(coords((0, 0), (0, 1), (1, 0), (1, 1), (0.5, 0.5)))

    assert hull.type == GeometryType.POLYGON
    assert as_pairs(hull) == [
        (0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)
    ]
    assert hull.vertex_count == 4


def test_triangle_excludes_interior_point():
    hull = compute_convex_hull(coords((0, 0), (4, 0), (2, 3), (2, 1)))

    assert as_pairs(hull) == [(0.0, 0.0), (4.0, 0.0), (2.0, 3.0), (0.0, 0.0)]


def test_points_on_edges_are_not_vertices():
    hull = compute_convex_hull(coords((0, 0), (2, 0), (2, 2), (0, 2), (1, 0), (2, 1)))

    assert as_pairs(hull) == [
        (0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0), (0.0, 0.0)
    ]


def test_canonical_start_breaks_latitude_ties_by_longitude():
    hull = compute_convex_hull(coords((5, -1), (3, -1), (4, 6)))

    assert as_pairs(hull)[0] == (3.0, -1.0)


def test_geographic_coordinates():
    hull = compute_convex_hull(coords(
        (2.3522, 48.8566),   # Paris
        (-0.1276, 51.5072),  # London
        (13.4050, 52.5200),  # Berlin
        (4.3517, 50.8503),   # Brussels
    ))

    assert hull.type == GeometryType.POLYGON
    assert as_pairs(hull)[0] == (2.3522, 48.8566)
    assert (4.3517, 50.8503) not in as_pairs(hull)


def test_reproducible_across_insertion_orders():
    points = [Coordinate(float(x), float(y)) for x, y in
              [(0, 0), (3, 1), (4, 4), (1, 3), (2, 2), (-1, 2), (2, -1)]]
    expected = compute_convex_hull(set(points))

    rng = random.Random(7)
    for _ in range(10):
        shuffled = points[:]
        rng.shuffle(shuffled)
        assert compute_convex_hull(shuffled) == expected


def test_random_cloud_properties():
    rng = np.random.default_rng(42)
    cloud = {Coordinate(float(x), float(y)) for x, y in rng.uniform(-50, 50, size=(300, 2))}

    hull = compute_convex_hull(cloud)

    assert hull.type == GeometryType.POLYGON
    ring = as_pairs(hull)
    assert ring[0] == ring[-1]
    vertices = ring[:-1]
    assert len(set(vertices)) == len(vertices)
    assert set(vertices) <= {c.as_tuple() for c in cloud}
    assert LinearRing(ring).is_ccw
    assert vertices[0] == min(vertices, key=lambda p: (p[1], p[0]))

    polygon = Polygon(ring)
    assert polygon.equals(MultiPoint([c.as_tuple() for c in cloud]).convex_hull)
    assert all(polygon.covers(Point(c.as_tuple())) for c in cloud)


def test_input_not_mutated():
    points = coords((0, 0), (1, 0), (0, 1))
    before = set(points)

    compute_convex_hull(points)

    assert points == before


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_coordinates_do_not_raise(bad):
    points = {Coordinate(bad, bad), Coordinate(0.0, 0.0), Coordinate(1.0, 1.0), Coordinate(0.0, 1.0)}

    hull = compute_convex_hull(points)

    assert hull is None or isinstance(hull, HullGeometry)


def test_coordinate_equality_is_exact():
    assert Coordinate(0.1 + 0.2, 1.0) != Coordinate(0.3, 1.0)
    assert Coordinate(1.0, 2.0) == Coordinate(1.0, 2.0)
    assert hash(Coordinate(1.0, 2.0)) == hash(Coordinate(1.0, 2.0))


@pytest.mark.parametrize("value, expected", [
    ([1.5, 2.5], Coordinate(1.5, 2.5)),
    ((1, 2), Coordinate(1.0, 2.0)),
    ({"lon": 1.5, "lat": 2.5}, Coordinate(1.5, 2.5)),
    ("2.5,1.5", Coordinate(1.5, 2.5)),
])
def test_coordinate_from_value(value, expected):
    assert Coordinate.from_value(value) == expected


@pytest.mark.parametrize("value", [
    [1.0], [1.0, 2.0, 3.0], {"lon": 1.0}, "1.0", "a,b", None, 3.0,
])
def test_coordinate_from_value_rejects(value):
    with pytest.raises(ValueError):
        Coordinate.from_value(value)
