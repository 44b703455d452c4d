"""Ray intersection records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .vectors import Vec3

# Largest finite single-precision float: "no hit yet".
FLT_MAX = 3.4028234663852886e38


@dataclass
class Hit:
    """The closest intersection found so far along a ray."""

    t: float = FLT_MAX
    material: Optional[Any] = None
    normal: Vec3 = field(default_factory=Vec3)
    texture_s: float = 0.0
    texture_t: float = 0.0

    def set(self, t: float, material: Any, normal: Vec3) -> None:
        """Record a new intersection; texture coordinates are reset."""
        self.t = t
        self.material = material
        self.normal = normal
        self.texture_s = 0.0
        self.texture_t = 0.0

    def set_texture_coords(self, s: float, t: float) -> None:
        self.texture_s = s
        self.texture_t = t

    def __str__(self) -> str:
        n = self.normal
        return f"Hit <{self.t:g}, < {n.x:g},{n.y:g},{n.z:g} > > "