import pytest

from lumenscene.boundingbox import BoundingBox
from lumenscene.vectors import Vec3


def test_default_box_is_origin():
    box = BoundingBox()
    assert box.minimum == Vec3()
    assert box.maximum == Vec3()
    assert box.max_dim() == 0


def test_from_point_center_is_point():
    p = Vec3(1.5, -2.0, 3.0)
    box = BoundingBox.from_point(p)
    assert box.center() == p
    assert box.max_dim() == 0


def test_center_of_box():
    box = BoundingBox(Vec3(0, 0, 0), Vec3(2, 4, 6))
    assert box.center() == Vec3(1, 2, 3)


def test_max_dim_picks_largest_extent():
    box = BoundingBox(Vec3(0, 0, 0), Vec3(2, 4, 6))
    assert box.max_dim() == 6


def test_extend_with_points_encloses_all():
    points = [Vec3(1, 2, 3), Vec3(-1, 5, 0), Vec3(4, -2, 7)]
    box = BoundingBox.from_point(points[0])
    for p in points[1:]:
        box.extend(p)
    for p in points:
        assert all(lo <= c <= hi for lo, c, hi in zip(box.minimum, p, box.maximum))
    assert box.minimum == Vec3(-1, -2, 0)
    assert box.maximum == Vec3(4, 5, 7)


def test_extend_with_inner_point_is_noop():
    box = BoundingBox(Vec3(0, 0, 0), Vec3(2, 2, 2))
    box.extend(Vec3(1, 1, 1))
    assert box == BoundingBox(Vec3(0, 0, 0), Vec3(2, 2, 2))


def test_extend_with_box_matches_extend_with_corners():
    a = BoundingBox(Vec3(0, 0, 0), Vec3(1, 1, 1))
    b = BoundingBox(Vec3(-3, 0.5, 2), Vec3(-2, 4, 5))
    by_box = BoundingBox(a.minimum, a.maximum)
    by_box.extend(b)
    by_points = BoundingBox(a.minimum, a.maximum)
    by_points.extend(b.minimum)
    by_points.extend(b.maximum)
    assert by_box == by_points
    assert by_box.minimum == Vec3(-3, 0, 0)


def test_inverted_box_rejected():
    with pytest.raises(ValueError):
        BoundingBox(Vec3(1, 0, 0), Vec3(0, 1, 1))