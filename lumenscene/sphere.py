"""Implicit primitives that can be ray traced and rasterized into quads."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Protocol

from .hit import Hit
from .utils import EPSILON
from .vectors import Vec3


class RayLike(Protocol):
    origin: Vec3
    direction: Vec3

    def point_at_parameter(self, t: float) -> Vec3: ...


class VertexSink(Protocol):
    """The part of a mesh that rasterized primitives write into."""

    def add_vertex(self, position: Vec3) -> Any: ...

    def add_rasterized_primitive_face(self, a: Any, b: Any, c: Any, d: Any,
                                      material: Any) -> None: ...


class SphereResolution(Protocol):
    sphere_horiz: int
    sphere_vert: int


class Primitive(ABC):
    """An implicit surface: intersectable by rays, convertible into quad patches."""

    def __init__(self, material: Any) -> None:
        self.material = material

    @abstractmethod
    def intersect(self, ray: RayLike, hit: Hit) -> bool:
        """Update ``hit`` and return True if the ray meets this surface closer than ``hit.t``."""

    @abstractmethod
    def add_rasterized_faces(self, mesh: VertexSink, settings: SphereResolution) -> None:
        """Add quad patches approximating this surface to ``mesh``."""


def compute_sphere_point(s: float, t: float, center: Vec3, radius: float) -> Vec3:
    """Point on the sphere at longitude fraction ``s`` and latitude fraction ``t`` (0 = bottom)."""
    angle = 2 * math.pi * s
    y = -math.cos(math.pi * t)
    factor = math.sqrt(max(0.0, 1 - y * y))
    x = factor * math.cos(angle)
    z = factor * -math.sin(angle)
    return Vec3(x, y, z) * radius + center


class Sphere(Primitive):
    """A sphere given by its centre and radius."""

    def __init__(self, center: Vec3, radius: float, material: Any) -> None:
        if radius < 0:
            raise ValueError(f"sphere radius must not be negative, got {radius}")
        super().__init__(material)
        self.center = center
        self.radius = radius

    def intersect(self, ray: RayLike, hit: Hit) -> bool:
        d = ray.direction
        co = ray.origin - self.center
        a = d.dot(d)
        b = 2 * co.dot(d)
        c = co.dot(co) - self.radius * self.radius
        discrim = b * b - 4 * a * c
        if a == 0 or discrim < 0:
            return False
        root = math.sqrt(discrim)
        far = (-b + root) / (2 * a)
        near = (-b - root) / (2 * a)

        t_prev = hit.t
        if not (far > EPSILON and near < t_prev and (near > EPSILON or far < t_prev)):
            return False
        t = near if near > EPSILON else far
        hit.set(t, self.material, (ray.point_at_parameter(t) - self.center).normalized())
        return True

    def add_rasterized_faces(self, mesh: VertexSink, settings: SphereResolution) -> None:
        h = settings.sphere_horiz
        v = settings.sphere_vert
        if h <= 0 or h % 2:
            raise ValueError(f"sphere_horiz must be a positive even number, got {h}")
        if v < 2:
            raise ValueError(f"sphere_vert must be at least 2, got {v}")

        verts = [mesh.add_vertex(self.center + self.radius * Vec3(0, -1, 0))]
        verts += [
            mesh.add_vertex(compute_sphere_point(i / h, j / v, self.center, self.radius))
            for j in range(1, v)
            for i in range(h)
        ]
        verts.append(mesh.add_vertex(self.center + self.radius * Vec3(0, 1, 0)))

        def ring(i: int, j: int) -> Any:
            return verts[1 + i % h + h * (j - 1)]

        for j in range(1, v - 1):
            for i in range(h):
                a, b = ring(i, j), ring(i + 1, j)
                c, d = ring(i, j + 1), ring(i + 1, j + 1)
                mesh.add_rasterized_primitive_face(a, b, d, c, self.material)

        bottom, top = verts[0], verts[-1]
        for i in range(0, h, 2):
            b, c, d = ring(i, 1), ring(i + 1, 1), ring(i + 2, 1)
            mesh.add_rasterized_primitive_face(d, c, b, bottom, self.material)
            b, c, d = ring(i, v - 1), ring(i + 1, v - 1), ring(i + 2, v - 1)
            mesh.add_rasterized_primitive_face(b, c, d, top, self.material)