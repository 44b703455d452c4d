"""Colour conversion, geometry helpers and triangle packing for display."""

from __future__ import annotations

import math
import struct
from typing import Protocol, Sequence

from .vectors import Vec3

#: Tolerance used throughout ray intersection code.
EPSILON = 0.0001

#: Offset of the sRGB transfer curve.
SRGB_ALPHA = 0.055

#: One packed vertex: position (x, y, z, 1), normal (x, y, z, 0), colour (r, g, b, 1).
VertexRecord = tuple[float, ...]


class RandomSource(Protocol):
    def random(self) -> float: ...


def _f32(value: float) -> float:
    """Round a double to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def linear_to_srgb(x: float) -> float:
    """Convert a linear intensity to an sRGB value."""
    if x <= 0.0031308:
        return 12.92 * x
    return (1 + SRGB_ALPHA) * (x ** (1 / 2.4) - SRGB_ALPHA)


def srgb_to_linear(x: float) -> float:
    """Convert an sRGB value to a linear intensity."""
    if x <= 0.04045:
        return x / 12.92
    return ((x + SRGB_ALPHA) / (1 + SRGB_ALPHA)) ** 2.4


def distance(p1: Vec3, p2: Vec3) -> float:
    return (p1 - p2).length()


def triangle_area_from_sides(a: float, b: float, c: float) -> float:
    """Area of a triangle from its edge lengths (Heron's formula)."""
    s = (a + b + c) / 2
    area_sq = s * (s - a) * (s - b) * (s - c)
    if area_sq < 0:
        # rounding on a degenerate triangle can push the product just below zero
        if area_sq > -1e-9 * max(s, 1.0) ** 4:
            return 0.0
        raise ValueError(f"side lengths {a}, {b}, {c} do not form a triangle")
    return math.sqrt(area_sq)


def triangle_area(a: Vec3, b: Vec3, c: Vec3) -> float:
    """Area of the triangle with the given corners."""
    return triangle_area_from_sides(distance(a, b), distance(b, c), distance(c, a))


def compute_normal(p1: Vec3, p2: Vec3, p3: Vec3) -> Vec3:
    """Unit normal of the triangle p1, p2, p3 (counter-clockwise is front)."""
    return (p2 - p1).cross(p3 - p2).normalized()


def random_unit_vector(rng: RandomSource) -> Vec3:
    """A uniformly random direction, drawn by rejection from the unit ball."""
    while True:
        candidate = Vec3(2 * rng.random() - 1, 2 * rng.random() - 1, 2 * rng.random() - 1)
        if candidate.length() < 1:
            return candidate.normalized()


def reflection(incoming: Vec3, normal: Vec3) -> Vec3:
    """The perfect mirror direction."""
    return incoming - incoming.dot(normal) * 2 * normal


def random_diffuse_direction(normal: Vec3, rng: RandomSource) -> Vec3:
    """A cosine-weighted random direction about the normal."""
    return (normal + random_unit_vector(rng)).normalized()


def _vertex(pos: Vec3, normal: Vec3, color: Vec3) -> VertexRecord:
    return (
        _f32(pos.x), _f32(pos.y), _f32(pos.z), 1.0,
        _f32(normal.x), _f32(normal.y), _f32(normal.z), 0.0,
        _f32(color.r), _f32(color.g), _f32(color.b), 1.0,
    )


def wireframe_triangle(apos: Vec3, bpos: Vec3, cpos: Vec3,
                       anormal: Vec3, bnormal: Vec3, cnormal: Vec3,
                       edge_color: Vec3,
                       acolor: Vec3, bcolor: Vec3, ccolor: Vec3,
                       wireframe: bool) -> list[VertexRecord]:
    """Three triangles (nine vertices): the main triangle and a strip along edge ab.

    When ``wireframe`` is false the strip is drawn in ``edge_color``.
    """
    frac = 0.05
    xpos = (1 - frac) * apos + frac * cpos
    ypos = (1 - frac) * bpos + frac * cpos
    xcolor = (1 - frac) * acolor + frac * ccolor
    ycolor = (1 - frac) * bcolor + frac * ccolor
    xnormal = ((1 - frac) * anormal + frac * cnormal).normalized()
    ynormal = ((1 - frac) * bnormal + frac * cnormal).normalized()

    records = [
        _vertex(xpos, xnormal, xcolor),
        _vertex(ypos, ynormal, ycolor),
        _vertex(cpos, cnormal, ccolor),
    ]

    if not wireframe:
        acolor = bcolor = xcolor = ycolor = edge_color

    records += [
        _vertex(apos, anormal, acolor),
        _vertex(bpos, bnormal, bcolor),
        _vertex(xpos, xnormal, xcolor),
        _vertex(xpos, xnormal, xcolor),
        _vertex(bpos, bnormal, bcolor),
        _vertex(ypos, ynormal, ycolor),
    ]
    return records


def quad(apos: Vec3, bpos: Vec3, cpos: Vec3, dpos: Vec3,
         normal: Vec3, color: Vec3) -> list[VertexRecord]:
    """Two triangles (abc, acd) covering a flat quad."""
    return [_vertex(p, normal, color) for p in (apos, bpos, cpos, apos, cpos, dpos)]


def box(corners: Sequence[Vec3], color: Vec3) -> list[VertexRecord]:
    """Twelve triangles forming a box from its eight corners."""
    if len(corners) != 8:
        raise ValueError(f"a box needs 8 corners, got {len(corners)}")
    p = corners
    zero = Vec3()
    records: list[VertexRecord] = []
    records += quad(p[0], p[1], p[3], p[2], zero, color)
    records += quad(p[4], p[6], p[7], p[5], -zero, color)
    records += quad(p[0], p[4], p[5], p[1], zero, color)
    records += quad(p[2], p[3], p[7], p[6], -zero, color)
    records += quad(p[0], p[2], p[6], p[4], zero, color)
    records += quad(p[1], p[5], p[7], p[3], zero, color)
    return records