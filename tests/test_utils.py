import math
import random

import pytest

from lumenscene.utils import (
    box,
    compute_normal,
    distance,
    linear_to_srgb,
    quad,
    random_diffuse_direction,
    random_unit_vector,
    reflection,
    srgb_to_linear,
    triangle_area,
    triangle_area_from_sides,
    wireframe_triangle,
)
from lumenscene.vectors import Vec3


def test_linear_to_srgb_linear_branch():
    assert linear_to_srgb(0.001) == pytest.approx(12.92 * 0.001)
    assert linear_to_srgb(0.0) == 0.0


def test_srgb_to_linear_linear_branch():
    assert srgb_to_linear(0.02) == pytest.approx(0.02 / 12.92)


def test_srgb_round_trip_in_linear_region():
    assert srgb_to_linear(linear_to_srgb(0.002)) == pytest.approx(0.002)


def test_srgb_curves_are_monotonic():
    xs = [i / 50 for i in range(51)]
    forward = [linear_to_srgb(x) for x in xs]
    backward = [srgb_to_linear(x) for x in xs]
    assert forward == sorted(forward)
    assert backward == sorted(backward)


def test_distance_is_symmetric():
    a, b = Vec3(1, 2, 3), Vec3(-2, 0.5, 7)
    assert distance(a, b) == pytest.approx(distance(b, a))
    assert distance(a, b) == pytest.approx((a - b).length())


def test_triangle_area_matches_cross_product():
    a, b, c = Vec3(0, 0, 0), Vec3(2, 0.5, 0), Vec3(0.3, 1.7, 0.4)
    expected = 0.5 * (b - a).cross(c - a).length()
    assert triangle_area(a, b, c) == pytest.approx(expected)


def test_triangle_area_degenerate_is_zero():
    assert triangle_area(Vec3(0, 0, 0), Vec3(1, 1, 1), Vec3(2, 2, 2)) == pytest.approx(0.0, abs=1e-6)


def test_triangle_area_from_impossible_sides_raises():
    with pytest.raises(ValueError):
        triangle_area_from_sides(1.0, 1.0, 5.0)


def test_compute_normal_counter_clockwise_xy():
    n = compute_normal(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(1, 1, 0))
    assert n == Vec3(0, 0, 1)


def test_compute_normal_is_unit_and_perpendicular():
    p1, p2, p3 = Vec3(1, 2, 0), Vec3(3, -1, 2), Vec3(0, 4, 5)
    n = compute_normal(p1, p2, p3)
    assert n.length() == pytest.approx(1.0)
    assert n.dot(p2 - p1) == pytest.approx(0.0, abs=1e-9)
    assert n.dot(p3 - p1) == pytest.approx(0.0, abs=1e-9)


def test_reflection_preserves_length_and_flips_normal_component():
    incoming = Vec3(0.3, -0.8, 0.2)
    normal = Vec3(0, 1, 0)
    out = reflection(incoming, normal)
    assert out.length() == pytest.approx(incoming.length())
    assert out.dot(normal) == pytest.approx(-incoming.dot(normal))
    assert out.x == pytest.approx(incoming.x)


def test_random_unit_vector_is_unit():
    rng = random.Random(5)
    for _ in range(50):
        assert random_unit_vector(rng).length() == pytest.approx(1.0)


def test_random_diffuse_direction_in_hemisphere():
    rng = random.Random(11)
    normal = Vec3(0, 0, 1)
    for _ in range(50):
        d = random_diffuse_direction(normal, rng)
        assert d.length() == pytest.approx(1.0)
        assert d.dot(normal) >= 0


def test_quad_layout():
    a, b, c, d = Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(1, 1, 0), Vec3(0, 1, 0)
    normal = Vec3(0, 0, 1)
    color = Vec3(0.5, 0.25, 1.0)
    records = quad(a, b, c, d, normal, color)
    assert len(records) == 6
    positions = [Vec3(*r[0:3]) for r in records]
    assert positions == [a, b, c, a, c, d]
    for r in records:
        assert len(r) == 12
        assert r[3] == 1.0 and r[7] == 0.0 and r[11] == 1.0
        assert Vec3(*r[4:7]) == normal
        assert Vec3(*r[8:11]) == color


def test_box_uses_only_corners():
    corners = [Vec3(x, y, z) for x in (0, 1) for y in (0, 1) for z in (0, 1)]
    records = box(corners, Vec3(1, 1, 0))
    assert len(records) == 36
    assert all(Vec3(*r[0:3]) in corners for r in records)
    assert {Vec3(*r[0:3]) for r in records} == set(corners)


def test_box_requires_eight_corners():
    with pytest.raises(ValueError):
        box([Vec3()] * 7, Vec3(1, 1, 1))


def _wire(wireframe):
    return wireframe_triangle(
        Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0.5, 1, 0),
        Vec3(0, 0, 1), Vec3(0, 0, 1), Vec3(0, 0, 1),
        Vec3(1, 0, 0),
        Vec3(0, 0.5, 0), Vec3(0, 0, 0.5), Vec3(0.25, 0.25, 0.25),
        wireframe,
    )


def test_wireframe_triangle_without_wireframe_uses_edge_color():
    records = _wire(False)
    assert len(records) == 9
    assert Vec3(*records[2][0:3]) == Vec3(0.5, 1, 0)
    for r in records[3:]:
        assert Vec3(*r[8:11]) == Vec3(1, 0, 0)


def test_wireframe_triangle_with_wireframe_keeps_vertex_colors():
    records = _wire(True)
    assert Vec3(*records[3][8:11]) == Vec3(0, 0.5, 0)
    assert Vec3(*records[4][8:11]) == Vec3(0, 0, 0.5)
    assert Vec3(*records[3][0:3]) == Vec3(0, 0, 0)


def test_wireframe_inner_points_lie_between_corners_and_apex():
    records = _wire(True)
    x = Vec3(*records[0][0:3])
    apex = Vec3(0.5, 1, 0)
    a = Vec3(0, 0, 0)
    assert distance(a, x) + distance(x, apex) == pytest.approx(distance(a, apex), rel=1e-6)
    assert all(math.isclose(r[6], 1.0) for r in records)