from dataclasses import dataclass

import pytest

from lumenscene.raytree import RayTree, Segment, segment_box
from lumenscene.vectors import Vec3


@dataclass
class _Ray:
    origin: Vec3
    direction: Vec3

    def point_at_parameter(self, t):
        return self.origin + t * self.direction


RAY = _Ray(Vec3(0, 0, 0), Vec3(1, 0, 0))


def test_segment_from_ray_endpoints():
    seg = Segment.from_ray(RAY, 0.0, 2.0)
    assert seg.start == Vec3(0, 0, 0)
    assert seg.end == Vec3(2, 0, 0)


def test_segment_from_ray_is_clamped():
    seg = Segment.from_ray(RAY, -5000.0, 5000.0)
    assert seg.start == Vec3(-1000, 0, 0)
    assert seg.end == Vec3(1000, 0, 0)


def test_inactive_tree_ignores_segments():
    tree = RayTree()
    tree.add_main_segment(RAY, 0, 1)
    tree.add_shadow_segment(RAY, 0, 1)
    assert tree.num_segments() == 0
    assert tree.pack_mesh() == []


def test_active_tree_counts_segments():
    tree = RayTree()
    tree.activate()
    tree.add_main_segment(RAY, 0, 1)
    tree.add_shadow_segment(RAY, 0, 1)
    tree.add_reflected_segment(RAY, 0, 1)
    tree.add_transmitted_segment(RAY, 0, 1)
    assert tree.num_segments() == 4
    assert tree.tri_count() == 4 * 12
    assert len(tree.pack_mesh()) == tree.tri_count() * 3


def test_activate_clears_previous_segments():
    tree = RayTree()
    tree.activate()
    tree.add_main_segment(RAY, 0, 1)
    tree.activate()
    assert tree.num_segments() == 0


def test_deactivate_stops_recording_but_keeps_segments():
    tree = RayTree()
    tree.activate()
    tree.add_main_segment(RAY, 0, 1)
    tree.deactivate()
    tree.add_main_segment(RAY, 0, 1)
    assert tree.num_segments() == 1
    assert len(tree.main_segments) == 1


def test_clear_empties_all_lists():
    tree = RayTree()
    tree.activate()
    tree.add_reflected_segment(RAY, 0, 1)
    tree.add_transmitted_segment(RAY, 0, 1)
    tree.clear()
    assert tree.num_segments() == 0


def test_pack_mesh_colours_by_kind():
    tree = RayTree()
    tree.activate()
    tree.add_shadow_segment(RAY, 0, 1)
    records = tree.pack_mesh()
    for r in records:
        assert r[8] == pytest.approx(0.1, rel=1e-6)
        assert r[9] == pytest.approx(0.9, rel=1e-6)
        assert r[10] == pytest.approx(0.1, rel=1e-6)


def test_segment_box_zero_length_collapses_to_point():
    start = Vec3(1, 2, 3)
    records = segment_box(start, start, Vec3(1, 1, 1), 0.01)
    assert len(records) == 36
    assert all(Vec3(*r[0:3]) == start for r in records)


def test_segment_box_corners_stay_near_segment():
    start, end = Vec3(0, 0, 0), Vec3(0, 0, 3)
    width = 0.05
    records = segment_box(start, end, Vec3(1, 1, 0), width)
    assert len(records) == 36
    for r in records:
        p = Vec3(*r[0:3])
        radial = Vec3(p.x, p.y, 0).length()
        assert radial == pytest.approx(width * 2 ** 0.5, rel=1e-4)
        assert p.z == pytest.approx(0.0, abs=1e-6) or p.z == pytest.approx(3.0, rel=1e-6)