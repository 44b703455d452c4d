"""Small immutable 3- and 4-component vectors of doubles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Number = Union[int, float]


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True, slots=True)
class Vec3:
    """A 3D point, direction or RGB colour."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # colour aliases
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        if index not in (0, 1, 2):
            raise IndexError(f"Vec3 index out of range: {index}")
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union[Vec3, Number]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Number) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: Number) -> Vec3:
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        length = self.length()
        if length:
            return Vec3(self.x / length, self.y / length, self.z / length)
        return self

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    @classmethod
    def parse(cls, text: str) -> Vec3:
        """Parse the ``< x , y , z >`` form produced by ``str``."""
        stripped = text.strip()
        if not (stripped.startswith("<") and stripped.endswith(">")):
            raise ValueError(f"malformed vector: {text!r}")
        parts = stripped[1:-1].split(",")
        if len(parts) != 3:
            raise ValueError(f"malformed vector: {text!r}")
        try:
            x, y, z = (float(part) for part in parts)
        except ValueError as exc:
            raise ValueError(f"malformed vector: {text!r}") from exc
        return cls(x, y, z)

    def __str__(self) -> str:
        return f"< {_fmt(self.x)} , {_fmt(self.y)} , {_fmt(self.z)} >"


@dataclass(frozen=True, slots=True)
class Vec4:
    """A homogeneous point or an RGBA colour."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    @property
    def a(self) -> float:
        return self.w

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __getitem__(self, index: int) -> float:
        if index not in (0, 1, 2, 3):
            raise IndexError(f"Vec4 index out of range: {index}")
        return (self.x, self.y, self.z, self.w)[index]

    def __add__(self, other: Vec4) -> Vec4:
        if not isinstance(other, Vec4):
            return NotImplemented
        return Vec4(*(p + q for p, q in zip(self, other)))

    def __sub__(self, other: Vec4) -> Vec4:
        if not isinstance(other, Vec4):
            return NotImplemented
        return Vec4(*(p - q for p, q in zip(self, other)))

    def __neg__(self) -> Vec4:
        return self.scaled(-1.0)

    def __mul__(self, other: Number) -> Vec4:
        if isinstance(other, (int, float)):
            return self.scaled(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> Vec4:
        if isinstance(other, (int, float)):
            return Vec4(*(p / other for p in self))
        return NotImplemented

    def length(self) -> float:
        """Euclidean length over all four components."""
        return math.sqrt(sum(p * p for p in self))

    def normalized(self) -> Vec4:
        """Divide x, y and z by the four-component length; w is kept."""
        length = self.length()
        if length > 0:
            return Vec4(self.x / length, self.y / length, self.z / length, self.w)
        return self

    def scaled(self, d0: float, d1: float | None = None, d2: float | None = None,
               d3: float | None = None) -> Vec4:
        """Scale each component; omitted factors default to ``d0``."""
        factors = (d0, d0 if d1 is None else d1, d0 if d2 is None else d2,
                   d0 if d3 is None else d3)
        return Vec4(*(p * f for p, f in zip(self, factors)))

    def dot(self, other: Vec4) -> float:
        return sum(p * q for p, q in zip(self, other))

    def cross3(self, other: Vec4) -> Vec4:
        """Cross product of the xyz parts, with w set to 1."""
        return Vec4(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            1.0,
        )

    def divide_by_w(self) -> Vec4:
        """Project to w = 1; a zero w yields the origin."""
        if self.w != 0:
            return Vec4(self.x / self.w, self.y / self.w, self.z / self.w, 1.0)
        return Vec4(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def parse(cls, text: str) -> Vec4:
        """Parse four whitespace-separated numbers."""
        parts = text.split()
        if len(parts) != 4:
            raise ValueError(f"malformed vector: {text!r}")
        try:
            return cls(*(float(part) for part in parts))
        except ValueError as exc:
            raise ValueError(f"malformed vector: {text!r}") from exc

    def __str__(self) -> str:
        return " ".join(_fmt(p) for p in self)