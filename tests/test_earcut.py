"""Tests for the public triangulation entry point."""

import math

import numpy as np
import pytest

from polytri.earcut import deviation, earcut, flatten
from polytri.earcut import triangulator


def _cross(data, dim, a, b, c):
    ax, ay = data[a * dim], data[a * dim + 1]
    bx, by = data[b * dim], data[b * dim + 1]
    cx, cy = data[c * dim], data[c * dim + 1]
    return (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)


def _circle(n, radius=10.0):
    data = []
    for k in range(n):
        angle = 2 * math.pi * k / n
        data.extend([radius * math.cos(angle), radius * math.sin(angle)])
    return data


SQUARE_WITH_HOLE = [0, 0, 4, 0, 4, 4, 0, 4, 1, 1, 3, 1, 3, 3, 1, 3]


class TestSimplePolygons:
    """Hole-free polygons."""

    def test_unit_square(self):
        data = [0, 0, 1, 0, 1, 1, 0, 1]
        triangles = earcut(data)
        assert len(triangles) == 6
        assert deviation(data, None, 2, triangles) == 0

    def test_triangle(self):
        triangles = earcut([0, 0, 2, 0, 1, 1])
        assert sorted(triangles) == [0, 1, 2]

    def test_concave_l_shape(self):
        data = [0, 0, 2, 0, 2, 1, 1, 1, 1, 2, 0, 2]
        triangles = earcut(data)
        assert len(triangles) == 3 * (6 - 2)
        assert deviation(data, None, 2, triangles) == pytest.approx(0, abs=1e-12)

    def test_clockwise_input(self):
        data = [0, 1, 1, 1, 1, 0, 0, 0]
        triangles = earcut(data)
        assert len(triangles) == 6
        assert deviation(data, None, 2, triangles) == 0

    @pytest.mark.parametrize("n", [3, 5, 12, 40])
    def test_convex_triangle_count(self, n):
        data = _circle(n)
        triangles = earcut(data)
        assert len(triangles) == 3 * (n - 2)
        assert deviation(data, None, 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_comb(self):
        # a saw-tooth with many reflex vertices
        data = [0, 0, 10, 0, 10, 3]
        for k in range(9, 0, -1):
            data.extend([k + 0.5, 1, k, 3])
        data.extend([0, 3])
        n = len(data) // 2
        triangles = earcut(data)
        assert len(triangles) == 3 * (n - 2)
        assert deviation(data, None, 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_orientation_is_consistent(self):
        for data in ([0, 0, 2, 0, 2, 1, 1, 1, 1, 2, 0, 2], [0, 2, 1, 2, 1, 1, 2, 1, 2, 0, 0, 0]):
            triangles = earcut(data)
            for t in range(0, len(triangles), 3):
                assert _cross(data, 2, *triangles[t:t + 3]) > 0

    def test_stride_three_ignores_extra_components(self):
        data = [0, 0, 7, 1, 0, -3, 1, 1, 100, 0, 1, 0.5]
        triangles = earcut(data, dim=3)
        assert len(triangles) == 6
        assert deviation(data, None, 3, triangles) == 0

    def test_numpy_input(self):
        data = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 4.0], [0.0, 4.0], [1, 1], [3, 1], [3, 3], [1, 3]])
        triangles = earcut(data.ravel(), np.array([4]))
        assert len(triangles) == 24
        assert all(isinstance(i, int) for i in triangles)


class TestHoles:
    """Polygons with holes are bridged into a single ring."""

    def test_square_with_square_hole(self):
        triangles = earcut(SQUARE_WITH_HOLE, [4])
        assert len(triangles) == 3 * 8
        assert deviation(SQUARE_WITH_HOLE, [4], 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_area_of_square_with_hole(self):
        triangles = earcut(SQUARE_WITH_HOLE, [4])
        total = sum(_cross(SQUARE_WITH_HOLE, 2, *triangles[t:t + 3]) for t in range(0, len(triangles), 3))
        assert total / 2 == pytest.approx(12)

    def test_hole_winding_does_not_matter(self):
        data = [0, 0, 4, 0, 4, 4, 0, 4, 1, 3, 3, 3, 3, 1, 1, 1]
        triangles = earcut(data, [4])
        assert len(triangles) == 3 * 8
        assert deviation(data, [4], 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_two_holes(self):
        outer = [0, 0, 10, 0, 10, 10, 0, 10]
        hole1 = [2, 2, 4, 2, 4, 4, 2, 4]
        hole2 = [6, 5.5, 8, 5, 8.5, 7, 6.5, 7.5]
        data = outer + hole1 + hole2
        triangles = earcut(data, [4, 8])
        # N + M + 2H - 2
        assert len(triangles) == 3 * (4 + 8 + 2 * 2 - 2)
        assert deviation(data, [4, 8], 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_steiner_point(self):
        data = [0, 0, 4, 0, 4, 4, 0, 4, 2, 2]
        triangles = earcut(data, [4])
        assert 4 in triangles
        assert deviation(data, [4], 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_flattened_input(self):
        rings = [
            [[0, 0], [4, 0], [4, 4], [0, 4]],
            [[1, 1], [3, 1], [3, 3], [1, 3]],
        ]
        flat = flatten(rings)
        triangles = earcut(flat["vertices"], flat["holes"], flat["dimensions"])
        assert triangles == earcut(SQUARE_WITH_HOLE, [4])


class TestDegenerateInput:
    """Degenerate input yields fewer or no triangles, never an error."""

    def test_empty(self):
        assert earcut([]) == []

    def test_single_point(self):
        assert earcut([1, 1]) == []

    def test_two_points(self):
        assert earcut([0, 0, 1, 1]) == []

    def test_collinear_points(self):
        assert earcut([0, 0, 1, 0, 2, 0, 3, 0]) == []

    def test_duplicate_closing_point(self):
        data = [0, 0, 1, 0, 1, 1, 0, 1, 0, 0]
        triangles = earcut(data)
        assert len(triangles) == 6
        assert deviation(data, None, 2, triangles) == pytest.approx(0, abs=1e-12)

    def test_bowtie(self):
        # only the lobe with a convex corner is clipped, the rest has no diagonal
        bowtie = [0, 0, 2, 2, 2, 0, 0, 2]
        triangles = earcut(bowtie)
        assert triangles == [3, 2, 1]
        assert _cross(bowtie, 2, 3, 2, 1) > 0

    @pytest.mark.parametrize(
        "data",
        [
            [0, 3, 1, 2, 1, 3, 4, 0, 4, 3, 1, 3],
            [0, 0, 4, 0, 2, -1, 2, 1, 10, 2, 10, 10, 0, 10],
            [0, 0, 4, 0, 2, -1, 2, 0, 10, 2, 10, 10, 0, 10],
            [0, 0, 2, 2, 2, 0, 0, 2, -1, 1],
            [0, 0, 10, 0, 0, 10, 10, 10, 5, -5, 5, 15],
        ],
    )
    def test_self_intersecting_emits_only_proper_triangles(self, data):
        triangles = earcut(data)
        assert len(triangles) % 3 == 0
        for k in range(0, len(triangles), 3):
            assert _cross(data, 2, *triangles[k : k + 3]) > 0, triangles[k : k + 3]

    def test_hole_outside_outer_ring_is_ignored(self, caplog):
        data = [10, 0, 20, 0, 20, 10, 10, 10] + [0, 4, 2, 4, 2, 6, 0, 6]
        with caplog.at_level("DEBUG", logger="polytri.earcut.holes"):
            triangles = earcut(data, [4])
        assert len(triangles) == 6
        assert set(triangles) == {0, 1, 2, 3}
        assert "No bridge found" in caplog.text

    def test_work_item_guard(self, monkeypatch, caplog):
        monkeypatch.setattr(triangulator, "MAX_WORK_ITEMS", 0)
        with caplog.at_level("WARNING"):
            assert earcut([0, 0, 1, 0, 1, 1, 0, 1]) == []
        assert "Giving up" in caplog.text


class TestSpatialIndex:
    """Large inputs go through the z-order index."""

    def test_indexed_convex_polygon(self):
        n = triangulator.HASH_THRESHOLD + 20
        data = _circle(n)
        triangles = earcut(data)
        assert len(triangles) == 3 * (n - 2)
        assert deviation(data, None, 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_indexed_matches_plain_count(self, monkeypatch):
        data = _circle(triangulator.HASH_THRESHOLD + 1)
        indexed = earcut(data)
        monkeypatch.setattr(triangulator, "HASH_THRESHOLD", 10_000)
        plain = earcut(data)
        assert len(indexed) == len(plain)

    def test_decimated_geometry(self):
        n = triangulator.HASH_THRESHOLD + 1
        data = _circle(n)
        decimated = _circle(n // 2)
        assert len(earcut(data)) // 3 - n == len(earcut(decimated)) // 3 - n // 2

    def test_indexed_with_holes(self):
        outer = _circle(120, radius=20.0)
        hole = _circle(30, radius=5.0)
        data = outer + hole
        triangles = earcut(data, [120])
        assert len(triangles) == 3 * (120 + 30 + 2 - 2)
        assert deviation(data, [120], 2, triangles) == pytest.approx(0, abs=1e-9)

    def test_idempotent(self):
        data = _circle(120, radius=20.0) + _circle(30, radius=5.0)
        first = earcut(data, [120])
        second = earcut(data, [120])
        assert len(first) == len(second)
        assert deviation(data, [120], 2, first) == pytest.approx(deviation(data, [120], 2, second))
