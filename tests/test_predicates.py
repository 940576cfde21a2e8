"""Tests for the orientation and visibility predicates."""

import pytest

from polytri.earcut.arena import NodeArena
from polytri.earcut.predicates import (
    area,
    intersects,
    is_valid_diagonal,
    locally_inside,
    middle_inside,
    point_in_triangle,
    sign,
)


def _ring(points):
    arena = NodeArena()
    last = None
    for i, (x, y) in enumerate(points):
        last = arena.insert_node(i, x, y, last)
    return arena, arena.ring(arena.next[last])


class TestArea:
    def test_counter_clockwise_turn_is_negative(self):
        arena, (p, q, r) = _ring([(0, 0), (1, 0), (1, 1)])
        assert area(arena, p, q, r) < 0

    def test_clockwise_turn_is_positive(self):
        arena, (p, q, r) = _ring([(0, 0), (1, 1), (1, 0)])
        assert area(arena, p, q, r) > 0

    def test_collinear_is_zero(self):
        arena, (p, q, r) = _ring([(0, 0), (1, 1), (2, 2)])
        assert area(arena, p, q, r) == 0


class TestPointInTriangle:
    @pytest.mark.parametrize(
        "point, expected",
        [((0.25, 0.25), True), ((0, 0), True), ((0.5, 0), True), ((1, 1), False), ((-0.1, 0.1), False)],
    )
    def test_point_in_triangle(self, point, expected):
        # the convex winding used by the ear test
        assert point_in_triangle(0, 1, 0, 0, 1, 0, *point) == expected


class TestIntersects:
    def test_crossing_segments(self):
        arena, (a, b, c, d) = _ring([(0, 0), (2, 2), (0, 2), (2, 0)])
        assert intersects(arena, a, b, c, d)

    def test_parallel_segments(self):
        arena, (a, b, c, d) = _ring([(0, 0), (2, 0), (0, 1), (2, 1)])
        assert not intersects(arena, a, b, c, d)

    def test_touching_endpoint(self):
        arena, (a, b, c, d) = _ring([(0, 0), (2, 0), (1, 0), (1, 2)])
        assert intersects(arena, a, b, c, d)

    def test_collinear_disjoint(self):
        arena, (a, b, c, d) = _ring([(0, 0), (1, 0), (2, 0), (3, 0)])
        assert not intersects(arena, a, b, c, d)

    def test_sign(self):
        assert sign(-2.5) == -1
        assert sign(0.0) == 0
        assert sign(3) == 1


class TestDiagonals:
    # an L shape in counter-clockwise order; vertex 3 is the reflex corner
    L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]

    def test_interior_diagonal_is_valid(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert is_valid_diagonal(arena, nodes[0], nodes[3])

    def test_exterior_diagonal_is_invalid(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert not is_valid_diagonal(arena, nodes[2], nodes[4])

    def test_adjacent_nodes_are_not_a_diagonal(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert not is_valid_diagonal(arena, nodes[0], nodes[1])

    def test_middle_inside(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert middle_inside(arena, nodes[0], nodes[3])
        assert not middle_inside(arena, nodes[2], nodes[4])

    def test_locally_inside_at_reflex_vertex(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert locally_inside(arena, nodes[3], nodes[0])
        assert locally_inside(arena, nodes[3], nodes[5])

    def test_locally_outside_at_convex_vertex(self):
        arena, nodes = _ring(self.L_SHAPE)
        assert not locally_inside(arena, nodes[2], nodes[4])
