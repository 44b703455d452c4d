"""Progressive-refinement radiosity over the quad patches of a mesh."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence

from .hit import Hit
from .settings import RenderMode, RenderSettings
from .utils import VertexRecord, linear_to_srgb, wireframe_triangle
from .vectors import Vec3


class MaterialLike(Protocol):
    diffuse_color: Vec3
    emitted_color: Vec3


class FaceLike(Protocol):
    """A quad patch with half-edge connectivity."""

    area: float
    material: MaterialLike
    vertices: Sequence[Any]
    edge: Any
    radiosity_patch_index: int

    def compute_normal(self) -> Vec3: ...

    def compute_centroid(self) -> Vec3: ...


class MeshLike(Protocol):
    def faces(self) -> Sequence[FaceLike]: ...


class RayCaster(Protocol):
    def cast_ray(self, ray: Any, hit: Hit, use_rasterized_patches: bool) -> bool: ...


@dataclass(frozen=True)
class _Ray:
    origin: Vec3
    direction: Vec3

    def point_at_parameter(self, t: float) -> Vec3:
        return self.origin + t * self.direction


def _face_edges(face: FaceLike):
    edge = face.edge
    for _ in range(4):
        yield edge
        edge = edge.next


def collect_faces_with_vertex(vertex: Any, face: FaceLike, faces: List[FaceLike]) -> None:
    """Append to ``faces`` every face reachable from ``face`` that shares ``vertex``."""
    if any(f is face for f in faces):
        return
    if not any(v is vertex for v in face.vertices):
        return
    faces.append(face)
    opposites = [e.opposite for e in _face_edges(face)]
    for opposite in opposites:
        if opposite is not None:
            collect_faces_with_vertex(vertex, opposite.face, faces)


class Radiosity:
    """Form factors and the shooting radiosity solution for a mesh's patches."""

    def __init__(self, mesh: MeshLike, settings: RenderSettings,
                 raytracer: Optional[RayCaster] = None,
                 photon_mapping: Any = None) -> None:
        self.mesh = mesh
        self.settings = settings
        self.raytracer = raytracer
        self.photon_mapping = photon_mapping
        self.form_factors: Optional[list[list[float]]] = None
        self._faces: list[FaceLike] = []
        self.area: list[float] = []
        self.undistributed: list[Vec3] = []
        self.absorbed: list[Vec3] = []
        self.radiance: list[Vec3] = []
        self.normals: list[Vec3] = []
        self.max_undistributed_patch = -1
        self.total_undistributed = 0.0
        self.total_area = -1.0
        self.reset()

    @property
    def num_faces(self) -> int:
        return len(self._faces)

    def _check(self, i: int) -> None:
        if not 0 <= i < self.num_faces:
            raise IndexError(f"patch index out of range: {i}")

    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Reload the patches from the mesh and restart the solution from the emitters."""
        self._faces = list(self.mesh.faces())
        self.area = []
        self.undistributed = []
        self.absorbed = []
        self.radiance = []
        self.normals = []
        for i, face in enumerate(self._faces):
            face.radiosity_patch_index = i
            emit = face.material.emitted_color
            self.area.append(face.area)
            self.undistributed.append(emit)
            self.absorbed.append(Vec3())
            self.radiance.append(emit)
            self.normals.append(face.compute_normal())
        self.find_max_undistributed()

    def cleanup(self) -> None:
        """Drop all per-patch data, including the form factors."""
        self.form_factors = None
        self._faces = []
        self.area = []
        self.undistributed = []
        self.absorbed = []
        self.radiance = []
        self.normals = []
        self.max_undistributed_patch = -1
        self.total_area = -1.0

    def find_max_undistributed(self) -> None:
        """Locate the patch with the most undistributed energy and update the totals."""
        if self.num_faces == 0:
            raise ValueError("the mesh has no faces")
        self.max_undistributed_patch = -1
        self.total_undistributed = 0.0
        self.total_area = 0.0
        best = -1.0
        for i, (undist, area) in enumerate(zip(self.undistributed, self.area)):
            m = undist.length() * area
            self.total_undistributed += m
            self.total_area += area
            if best < m:
                best = m
                self.max_undistributed_patch = i

    # ------------------------------------------------------------------

    def form_factor(self, i: int, j: int) -> float:
        self._check(i)
        self._check(j)
        if self.form_factors is None:
            raise RuntimeError("form factors have not been computed")
        return self.form_factors[i][j]

    def set_form_factor(self, i: int, j: int, value: float) -> None:
        self._check(i)
        self._check(j)
        if self.form_factors is None:
            raise RuntimeError("form factors have not been computed")
        self.form_factors[i][j] = value

    def normalize_form_factors(self, i: int) -> None:
        """Scale row ``i`` to sum to one; an all-zero row is left alone."""
        self._check(i)
        if self.form_factors is None:
            raise RuntimeError("form factors have not been computed")
        row = self.form_factors[i]
        total = sum(row)
        if total == 0:
            return
        self.form_factors[i] = [value / total for value in row]

    def compute_form_factors(self) -> None:
        """Point-to-point form factors between patch centroids, with visibility."""
        if self.form_factors is not None:
            raise RuntimeError("form factors are already computed")
        if self.num_faces <= 0:
            raise ValueError("the mesh has no faces")
        if self.raytracer is None:
            raise RuntimeError("a ray tracer is needed to compute form factors")
        n = self.num_faces
        self.form_factors = [[0.0] * n for _ in range(n)]
        centroids = [face.compute_centroid() for face in self._faces]
        for i in range(n):
            pi = centroids[i]
            for j in range(n):
                if i == j:
                    continue
                pj = centroids[j]
                hit = Hit()
                self.raytracer.cast_ray(_Ray(pj, pi - pj), hit, True)
                if hit.t < 1:
                    continue
                icjc = pj - pi
                r = icjc.length()
                cos_i = self.normals[i].dot(icjc) / (self.normals[i].length() * r)
                cos_j = self.normals[j].dot(-icjc) / (self.normals[j].length() * r)
                self.form_factors[i][j] = (abs(cos_i * cos_j) / math.pi / (r * r)
                                           / self.area[i])
            self.normalize_form_factors(i)
        self.find_max_undistributed()

    def iterate(self) -> float:
        """Shoot the energy of the brightest patch; return the total still undistributed."""
        if self.form_factors is None:
            self.compute_form_factors()
        p = self.max_undistributed_patch
        shot = self.undistributed[p]
        self.undistributed[p] = Vec3()
        for i, face in enumerate(self._faces):
            if i == p:
                continue
            rho = face.material.diffuse_color
            tp = shot * self.form_factor(i, p) * (self.area[p] / self.area[i])
            gained = rho * tp
            self.undistributed[i] = self.undistributed[i] + gained
            self.radiance[i] = self.radiance[i] + gained
            self.absorbed[i] = self.absorbed[i] + (Vec3(1, 1, 1) - rho) * tp
        self.find_max_undistributed()
        return self.total_undistributed

    # ------------------------------------------------------------------
    # rendering

    def _color_for(self, face: FaceLike, i: int, j: int) -> Vec3:
        mode = self.settings.render_mode
        if mode is RenderMode.MATERIALS:
            return face.material.diffuse_color
        if mode is RenderMode.RADIANCE and self.settings.interpolate:
            neighbours: list[FaceLike] = []
            collect_faces_with_vertex(face.vertices[j], face, neighbours)
            normal = face.compute_normal()
            total = 0.0
            color = Vec3()
            for other in neighbours:
                if normal.dot(other.compute_normal()) < 0.5:
                    continue
                total += other.area
                color = color + other.area * self.radiance[other.radiosity_patch_index]
            return color / total
        if mode is RenderMode.LIGHTS:
            return face.material.emitted_color
        if mode is RenderMode.UNDISTRIBUTED:
            return self.undistributed[i]
        if mode is RenderMode.ABSORBED:
            return self.absorbed[i]
        if mode is RenderMode.RADIANCE:
            return self.radiance[i]
        if mode is RenderMode.FORM_FACTORS:
            if self.form_factors is None:
                self.compute_form_factors()
            scale = 0.2 * self.total_area / self.area[i]
            factor = scale * self.form_factor(self.max_undistributed_patch, i)
            return Vec3(factor, factor, factor)
        raise ValueError(f"unknown render mode: {mode!r}")

    def tri_count(self) -> int:
        """Number of triangles that pack_mesh produces."""
        return 12 * self.num_faces

    def pack_mesh(self) -> list[VertexRecord]:
        """Vertex records drawing every patch as four wireframed triangles."""
        records: list[VertexRecord] = []
        for i, face in enumerate(self._faces):
            normal = face.compute_normal()
            highlight = (self.settings.render_mode is RenderMode.FORM_FACTORS
                         and i == self.max_undistributed_patch)
            wire_color = Vec3(1.0 if highlight else 0.0, 0.0, 0.0)
            positions = [v.position for v in face.vertices]
            colors = [Vec3(*(linear_to_srgb(c) for c in self._color_for(face, i, j)))
                      for j in range(4)]
            avg = 0.25 * (colors[0] + colors[1] + colors[2] + colors[3])
            centroid = face.compute_centroid()
            for k in range(4):
                nxt = (k + 1) % 4
                records += wireframe_triangle(
                    positions[k], positions[nxt], centroid,
                    normal, normal, normal,
                    wire_color,
                    colors[k], colors[nxt], avg,
                    self.settings.wireframe,
                )
        return records