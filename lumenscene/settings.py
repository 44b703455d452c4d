"""Render settings shared by the ray tracer, radiosity and photon mapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .vectors import Vec3


class RenderMode(Enum):
    """Visualisation modes for the radiosity solution."""

    MATERIALS = 0
    RADIANCE = 1
    FORM_FACTORS = 2
    LIGHTS = 3
    UNDISTRIBUTED = 4
    ABSORBED = 5

    def next(self) -> RenderMode:
        """The following mode, wrapping round after the last."""
        members = list(RenderMode)
        return members[(members.index(self) + 1) % len(members)]


def _zero_matrix() -> tuple[float, ...]:
    return (0.0,) * 16


@dataclass
class RenderSettings:
    """Image size, animation state and the parameters of each renderer."""

    width: int = 100
    height: int = 100

    # animation control
    raytracing_animation: bool = False
    radiosity_animation: bool = False

    # radiosity
    render_mode: RenderMode = RenderMode.MATERIALS
    interpolate: bool = False
    wireframe: bool = False
    num_form_factor_samples: int = 1
    sphere_horiz: int = 8
    sphere_vert: int = 6
    cylinder_ring_rasterization: int = 20

    # ray tracing
    num_bounces: int = 0
    num_shadow_samples: int = 0
    num_antialias_samples: int = 1
    num_glossy_samples: int = 1
    ambient_light: Vec3 = field(default_factory=Vec3)
    intersect_backfacing: bool = False
    raytracing_divs_x: int = 1
    raytracing_divs_y: int = 1
    raytracing_x: int = 0
    raytracing_y: int = 0

    # photon mapping
    num_photons_to_shoot: int = 10000
    num_photons_to_collect: int = 100
    render_photons: bool = False
    render_photon_directions: bool = False
    render_kdtree: bool = False
    gather_indirect: bool = False

    bounding_box_frame: bool = False

    proj_mat: tuple[float, ...] = field(default_factory=_zero_matrix)
    view_mat: tuple[float, ...] = field(default_factory=_zero_matrix)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if self.sphere_horiz <= 0 or self.sphere_horiz % 2:
            raise ValueError(f"sphere_horiz must be a positive even number, got {self.sphere_horiz}")
        if self.sphere_vert < 2:
            raise ValueError(f"sphere_vert must be at least 2, got {self.sphere_vert}")
        if len(self.proj_mat) != 16 or len(self.view_mat) != 16:
            raise ValueError("projection and view matrices must have 16 entries")