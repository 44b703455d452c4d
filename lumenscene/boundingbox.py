"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .vectors import Vec3


@dataclass
class BoundingBox:
    """An axis-aligned box that can grow to enclose points and other boxes."""

    minimum: Vec3 = field(default_factory=Vec3)
    maximum: Vec3 = field(default_factory=Vec3)

    def __post_init__(self) -> None:
        if any(lo > hi for lo, hi in zip(self.minimum, self.maximum)):
            raise ValueError(
                f"bounding box minimum {self.minimum} exceeds maximum {self.maximum}"
            )

    @classmethod
    def from_point(cls, point: Vec3) -> BoundingBox:
        """A degenerate box holding a single point."""
        return cls(point, point)

    def center(self) -> Vec3:
        return (self.maximum - self.minimum) * 0.5 + self.minimum

    def max_dim(self) -> float:
        """Largest extent along any axis."""
        return max(hi - lo for lo, hi in zip(self.minimum, self.maximum))

    def extend(self, other: Union[Vec3, BoundingBox]) -> None:
        """Grow the box to enclose a point or another box."""
        if isinstance(other, BoundingBox):
            self.extend(other.minimum)
            self.extend(other.maximum)
            return
        self.minimum = Vec3(*(min(a, b) for a, b in zip(self.minimum, other)))
        self.maximum = Vec3(*(max(a, b) for a, b in zip(self.maximum, other)))