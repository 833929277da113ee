import pytest

from config import CFG
from geometry import cell_corners, point_in_triangle
from models import Candidate, Dimension, Direction, Point as P, TriangleSpec
from placements import (
    ConfigError,
    Triangle,
    build_triangles,
    create_dimensions,
    create_shifts,
    orient,
)


@pytest.mark.parametrize("area", range(1, 41))
def test_dimensions_factor_twice_the_area(area):
    for base, height in create_dimensions(area):
        assert base * height == 2 * area
        assert base >= 2
        assert height >= 1


def test_dimensions_in_base_order():
    assert create_dimensions(2) == [Dimension(2, 2)]
    assert create_dimensions(20) == [
        Dimension(2, 20),
        Dimension(4, 10),
        Dimension(5, 8),
        Dimension(8, 5),
        Dimension(10, 4),
        Dimension(20, 2),
    ]
    assert create_dimensions(1) == []


def test_shifts_walk_down_then_left():
    assert create_shifts(Dimension(2, 2)) == (P(0, 0),)
    assert create_shifts(Dimension(4, 2)) == (P(0, 0), P(-1, 0))
    assert create_shifts(Dimension(2, 4)) == (P(0, 0), P(0, -1))


@pytest.mark.parametrize("dim", [Dimension(b, h) for b, h in create_dimensions(36)])
def test_every_shift_keeps_the_unit_square_inside(dim):
    shifts = create_shifts(dim)
    assert shifts
    for sx, sy in shifts:
        tri = (P(sx, sy), P(sx, sy + dim.height), P(sx + dim.base, sy))
        for corner in cell_corners(0, 0):
            assert point_in_triangle(corner, *tri)


def test_orient_rotates_the_right_angle():
    dim = Dimension(4, 2)
    shift = P(-1, 0)
    assert orient(5, 5, dim, shift, Direction.UP) == Candidate(P(4, 5), P(8, 5), P(4, 7))
    assert orient(5, 5, dim, shift, Direction.RIGHT) == Candidate(P(5, 7), P(5, 3), P(7, 7))
    assert orient(5, 5, dim, shift, Direction.DOWN) == Candidate(P(7, 6), P(3, 6), P(7, 4))
    assert orient(5, 5, dim, shift, Direction.LEFT) == Candidate(P(6, 4), P(6, 8), P(4, 4))


@pytest.mark.parametrize("direction", list(Direction))
def test_every_rotation_covers_the_anchor_cell(direction):
    for dim in create_dimensions(12):
        for shift in create_shifts(dim):
            cand = orient(7, 9, dim, shift, direction)
            for corner in cell_corners(7, 9):
                assert point_in_triangle(corner, *cand)


def test_corner_anchor_keeps_only_the_upright_placement():
    tri = Triangle.build(TriangleSpec(2, 0, 0), matrix_max=3)
    assert tri.candidates == (Candidate(P(0, 0), P(2, 0), P(0, 2)),)


def test_starting_direction_leads_the_enumeration():
    up = Triangle.build(TriangleSpec(2, 2, 2), matrix_max=5)
    right = Triangle.build(TriangleSpec(2, 2, 2, Direction.RIGHT), matrix_max=5)
    assert up.candidates[0] == Candidate(P(2, 2), P(4, 2), P(2, 4))
    assert right.candidates[0] == Candidate(P(2, 3), P(2, 1), P(4, 3))
    assert set(up.candidates) == set(right.candidates)
    assert len(up.candidates) == 4


def test_configured_instance_respects_bounds_and_anchor():
    triangles = build_triangles()
    assert len(triangles) == 29
    assert (triangles[0].area, triangles[0].x, triangles[0].y) == (2, 3, 0)
    assert (triangles[-1].area, triangles[-1].x, triangles[-1].y) == (2, 13, 16)
    for tri in triangles:
        assert tri.direction == Direction.UP
        assert tri.candidates, f"no placement for area {tri.area} at {tri.anchor}"
        corners = cell_corners(tri.x, tri.y)
        for cand in tri.candidates:
            for p in cand:
                assert 0 <= p.x <= CFG.MATRIX_MAX
                assert 0 <= p.y <= CFG.MATRIX_MAX
            for corner in corners:
                assert point_in_triangle(corner, *cand)


def test_describe_lists_dimensions_and_shifts():
    tri = Triangle.build(TriangleSpec(4, 5, 5), matrix_max=17)
    assert tri.describe().splitlines() == ["2 4 = 0 0 0 -1", "4 2 = 0 0 -1 0"]


@pytest.mark.parametrize(
    "rows, matrix_max, needle",
    [
        ([(1, 0, 0)], 17, "no integer legs"),
        ([(0, 0, 0)], 17, "positive integer"),
        ([("big", 0, 0)], 17, "positive integer"),
        ([(2, 17, 0)], 17, "outside"),
        ([(2, -1, 0)], 17, "outside"),
        ([(2, 0, 3)], 3, "outside"),
        ([(2, 0, 0)], 0, "grid bound"),
        ([(2, 0)], 17, "cannot read"),
    ],
)
def test_malformed_configuration_fails_fast(rows, matrix_max, needle):
    with pytest.raises(ConfigError) as exc:
        build_triangles(rows, matrix_max)
    assert needle in str(exc.value)


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)
