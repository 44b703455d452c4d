"""Recording of traced ray segments for visualisation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .utils import VertexRecord, box
from .vectors import Vec3

MAIN_COLOR = Vec3(0.7, 0.7, 0.7)
SHADOW_COLOR = Vec3(0.1, 0.9, 0.1)
REFLECTED_COLOR = Vec3(0.9, 0.1, 0.1)
TRANSMITTED_COLOR = Vec3(0.1, 0.1, 0.9)
SEGMENT_WIDTH = 0.01


class RayLike(Protocol):
    def point_at_parameter(self, t: float) -> Vec3: ...


@dataclass(frozen=True)
class Segment:
    """A straight piece of a traced ray."""

    start: Vec3
    end: Vec3

    @classmethod
    def from_ray(cls, ray: RayLike, tstart: float, tstop: float) -> Segment:
        """The part of the ray between two parameters, clamped to [-1000, 1000]."""
        tstart = max(tstart, -1000.0)
        tstop = min(tstop, 1000.0)
        return cls(ray.point_at_parameter(tstart), ray.point_at_parameter(tstop))


def segment_box(start: Vec3, end: Vec3, color: Vec3, width: float) -> list[VertexRecord]:
    """A thin box of triangles drawn along the segment from start to end."""
    direction = end - start
    if direction.length() < 0.01 * width:
        one = two = Vec3()
    else:
        direction = direction.normalized()
        tmp = direction.cross(Vec3(1, 0, 0))
        if tmp.length() < 0.1:
            tmp = direction.cross(Vec3(0, 0, 1))
        tmp = tmp.normalized()
        one = direction.cross(tmp)
        two = direction.cross(one)

    corners = [
        start + width * one + width * two,
        start + width * one - width * two,
        start - width * one + width * two,
        start - width * one - width * two,
        end + width * one + width * two,
        end + width * one - width * two,
        end - width * one + width * two,
        end - width * one - width * two,
    ]
    return box(corners, color)


@dataclass
class RayTree:
    """Collects ray segments while activated; ignores them otherwise."""

    activated: bool = False
    main_segments: list[Segment] = field(default_factory=list)
    shadow_segments: list[Segment] = field(default_factory=list)
    reflected_segments: list[Segment] = field(default_factory=list)
    transmitted_segments: list[Segment] = field(default_factory=list)

    def activate(self) -> None:
        self.clear()
        self.activated = True

    def deactivate(self) -> None:
        self.activated = False

    def _add(self, target: list[Segment], ray: RayLike, tstart: float, tstop: float) -> None:
        if self.activated:
            target.append(Segment.from_ray(ray, tstart, tstop))

    def add_main_segment(self, ray: RayLike, tstart: float, tstop: float) -> None:
        self._add(self.main_segments, ray, tstart, tstop)

    def add_shadow_segment(self, ray: RayLike, tstart: float, tstop: float) -> None:
        self._add(self.shadow_segments, ray, tstart, tstop)

    def add_reflected_segment(self, ray: RayLike, tstart: float, tstop: float) -> None:
        self._add(self.reflected_segments, ray, tstart, tstop)

    def add_transmitted_segment(self, ray: RayLike, tstart: float, tstop: float) -> None:
        self._add(self.transmitted_segments, ray, tstart, tstop)

    def num_segments(self) -> int:
        return (len(self.main_segments) + len(self.shadow_segments)
                + len(self.reflected_segments) + len(self.transmitted_segments))

    def tri_count(self) -> int:
        """Number of triangles that pack_mesh produces."""
        return self.num_segments() * 12

    def pack_mesh(self) -> list[VertexRecord]:
        """Vertex records for every segment, coloured by segment kind."""
        records: list[VertexRecord] = []
        groups = (
            (self.main_segments, MAIN_COLOR),
            (self.shadow_segments, SHADOW_COLOR),
            (self.reflected_segments, REFLECTED_COLOR),
            (self.transmitted_segments, TRANSMITTED_COLOR),
        )
        for segments, color in groups:
            for seg in segments:
                records += segment_box(seg.start, seg.end, color, SEGMENT_WIDTH)
        return records

    def clear(self) -> None:
        self.main_segments.clear()
        self.shadow_segments.clear()
        self.reflected_segments.clear()
        self.transmitted_segments.clear()