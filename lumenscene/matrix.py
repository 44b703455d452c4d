"""4x4 transformation matrices stored in column-major order."""

from __future__ import annotations

import math
import struct
from typing import Iterable, Iterator, Union, overload

from .vectors import Vec3, Vec4

Number = Union[int, float]


class SingularMatrixError(ArithmeticError):
    """Raised when a matrix is too close to singular to invert."""


def _f32(value: float) -> float:
    """Round a double to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def det2x2(a: float, b: float, c: float, d: float) -> float:
    return a * d - b * c


def det3x3(a1: float, a2: float, a3: float,
           b1: float, b2: float, b3: float,
           c1: float, c2: float, c3: float) -> float:
    return (a1 * det2x2(b2, b3, c2, c3)
            - b1 * det2x2(a2, a3, c2, c3)
            + c1 * det2x2(a2, a3, b2, b3))


def det4x4(a1: float, a2: float, a3: float, a4: float,
           b1: float, b2: float, b3: float, b4: float,
           c1: float, c2: float, c3: float, c4: float,
           d1: float, d2: float, d3: float, d4: float) -> float:
    return (a1 * det3x3(b2, b3, b4, c2, c3, c4, d2, d3, d4)
            - b1 * det3x3(a2, a3, a4, c2, c3, c4, d2, d3, d4)
            + c1 * det3x3(a2, a3, a4, b2, b3, b4, d2, d3, d4)
            - d1 * det3x3(a2, a3, a4, b2, b3, b4, c2, c3, c4))


class Matrix:
    """A 4x4 matrix of doubles; the sixteen values are kept column by column."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[float] | None = None) -> None:
        if data is None:
            self._data = [0.0] * 16
            return
        values = [float(value) for value in data]
        if len(values) != 16:
            raise ValueError(f"a matrix needs 16 values, got {len(values)}")
        self._data = values

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def identity(cls) -> Matrix:
        return cls.from_rows([(1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1)])

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> Matrix:
        """Build a matrix from four rows of four values each."""
        grid = [[float(value) for value in row] for row in rows]
        if len(grid) != 4 or any(len(row) != 4 for row in grid):
            raise ValueError("a matrix needs 4 rows of 4 values")
        return cls(value for column in zip(*grid) for value in column)

    # ------------------------------------------------------------------
    # element access

    @staticmethod
    def _index(row: int, col: int) -> int:
        if not (0 <= row < 4 and 0 <= col < 4):
            raise IndexError(f"matrix index out of range: ({row}, {col})")
        return row + col * 4

    def get(self, row: int, col: int) -> float:
        return self._data[self._index(row, col)]

    def set(self, row: int, col: int, value: float) -> None:
        self._data[self._index(row, col)] = float(value)

    def __iter__(self) -> Iterator[float]:
        """The sixteen values in column-major order."""
        return iter(self._data)

    def _rows(self) -> list[list[float]]:
        return [self._data[row::4] for row in range(4)]

    def _columns(self) -> list[list[float]]:
        return [self._data[col * 4:col * 4 + 4] for col in range(4)]

    def to_float_list(self) -> list[float]:
        """The values in column-major order, rounded to single precision."""
        return [_f32(value) for value in self._data]

    # ------------------------------------------------------------------
    # standard operations

    def transposed(self) -> Matrix:
        return Matrix(value for row in self._rows() for value in row)

    def inverse(self, epsilon: float = 1e-08) -> Matrix:
        """The inverse matrix; raises SingularMatrixError if the determinant is tiny."""
        a1, b1, c1, d1 = self._data[0::4]
        a2, b2, c2, d2 = self._data[1::4]
        a3, b3, c3, d3 = self._data[2::4]
        a4, b4, c4, d4 = self._data[3::4]

        det = det4x4(a1, a2, a3, a4, b1, b2, b3, b4, c1, c2, c3, c4, d1, d2, d3, d4)
        if abs(det) < epsilon:
            raise SingularMatrixError("singular matrix, can't invert")

        rows = [
            [det3x3(b2, b3, b4, c2, c3, c4, d2, d3, d4),
             -det3x3(b1, b3, b4, c1, c3, c4, d1, d3, d4),
             det3x3(b1, b2, b4, c1, c2, c4, d1, d2, d4),
             -det3x3(b1, b2, b3, c1, c2, c3, d1, d2, d3)],
            [-det3x3(a2, a3, a4, c2, c3, c4, d2, d3, d4),
             det3x3(a1, a3, a4, c1, c3, c4, d1, d3, d4),
             -det3x3(a1, a2, a4, c1, c2, c4, d1, d2, d4),
             det3x3(a1, a2, a3, c1, c2, c3, d1, d2, d3)],
            [det3x3(a2, a3, a4, b2, b3, b4, d2, d3, d4),
             -det3x3(a1, a3, a4, b1, b3, b4, d1, d3, d4),
             det3x3(a1, a2, a4, b1, b2, b4, d1, d2, d4),
             -det3x3(a1, a2, a3, b1, b2, b3, d1, d2, d3)],
            [-det3x3(a2, a3, a4, b2, b3, b4, c2, c3, c4),
             det3x3(a1, a3, a4, b1, b3, b4, c1, c3, c4),
             -det3x3(a1, a2, a4, b1, b2, b4, c1, c2, c4),
             det3x3(a1, a2, a3, b1, b2, b3, c1, c2, c3)],
        ]
        return Matrix.from_rows(rows) * (1 / det)

    # ------------------------------------------------------------------
    # operators

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(p + q for p, q in zip(self._data, other._data))

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(p - q for p, q in zip(self._data, other._data))

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...
    @overload
    def __mul__(self, other: Vec3) -> Vec3: ...
    @overload
    def __mul__(self, other: Vec4) -> Vec4: ...
    @overload
    def __mul__(self, other: Number) -> Matrix: ...

    def __mul__(self, other):
        if isinstance(other, Matrix):
            rows = self._rows()
            columns = other._columns()
            return Matrix.from_rows(
                [sum(a * b for a, b in zip(row, column)) for column in columns]
                for row in rows
            )
        if isinstance(other, Vec4):
            return self.transform(other)
        if isinstance(other, Vec3):
            return self.transform_point(other)
        if isinstance(other, (int, float)):
            return Matrix(value * other for value in self._data)
        return NotImplemented

    def __rmul__(self, other):
        # scalar * matrix, and vector * matrix which means matrix * vector
        if isinstance(other, (int, float, Vec3, Vec4)):
            return self.__mul__(other)
        return NotImplemented

    # ------------------------------------------------------------------
    # transformations

    @classmethod
    def translation(cls, v: Vec3) -> Matrix:
        t = cls.identity()
        t.set(0, 3, v.x)
        t.set(1, 3, v.y)
        t.set(2, 3, v.z)
        return t

    @classmethod
    def scale(cls, v: Union[Vec3, Number]) -> Matrix:
        """A scaling matrix from per-axis factors or one uniform factor."""
        if isinstance(v, (int, float)):
            v = Vec3(v, v, v)
        s = cls()
        s.set(0, 0, v.x)
        s.set(1, 1, v.y)
        s.set(2, 2, v.z)
        s.set(3, 3, 1)
        return s

    @classmethod
    def x_rotation(cls, theta: float) -> Matrix:
        c, s = math.cos(theta), math.sin(theta)
        rx = cls.identity()
        rx.set(1, 1, c)
        rx.set(1, 2, -s)
        rx.set(2, 1, s)
        rx.set(2, 2, c)
        return rx

    @classmethod
    def y_rotation(cls, theta: float) -> Matrix:
        c, s = math.cos(theta), math.sin(theta)
        ry = cls.identity()
        ry.set(0, 0, c)
        ry.set(0, 2, s)
        ry.set(2, 0, -s)
        ry.set(2, 2, c)
        return ry

    @classmethod
    def z_rotation(cls, theta: float) -> Matrix:
        c, s = math.cos(theta), math.sin(theta)
        rz = cls.identity()
        rz.set(0, 0, c)
        rz.set(0, 1, -s)
        rz.set(1, 0, s)
        rz.set(1, 1, c)
        return rz

    @classmethod
    def axis_rotation(cls, axis: Vec3, theta: float) -> Matrix:
        """Rotation by theta about a unit axis, evaluated in single-precision trig."""
        x, y, z = axis
        angle = _f32(theta)
        c = _f32(math.cos(angle))
        s = _f32(math.sin(angle))
        k = 1 - c
        return cls.from_rows([
            (k * x * x + c, k * x * y - z * s, k * x * z + y * s, 0),
            (k * x * y + z * s, k * y * y + c, k * y * z - x * s, 0),
            (k * x * z - y * s, k * y * z + x * s, k * z * z + c, 0),
            (0, 0, 0, 1),
        ])

    def transform(self, v: Vec4) -> Vec4:
        """Multiply a homogeneous vector by this matrix."""
        return Vec4(*(sum(a * b for a, b in zip(row, v)) for row in self._rows()))

    def transform_point(self, v: Vec3) -> Vec3:
        """Transform a point, including translation and the division by w."""
        h = self.transform(Vec4(v.x, v.y, v.z, 1.0))
        return Vec3(h.x / h.w, h.y / h.w, h.z / h.w)

    def transform_direction(self, v: Vec3) -> Vec3:
        """Transform a direction, ignoring any translation."""
        h = self.transform(Vec4(v.x, v.y, v.z, 0.0))
        return Vec3(h.x, h.y, h.z)

    # ------------------------------------------------------------------
    # text input / output

    @classmethod
    def parse(cls, text: str) -> Matrix:
        """Read sixteen whitespace-separated numbers, row by row."""
        parts = text.split()
        if len(parts) != 16:
            raise ValueError(f"a matrix needs 16 numbers, got {len(parts)}")
        try:
            values = [float(part) for part in parts]
        except ValueError as exc:
            raise ValueError(f"malformed matrix: {text!r}") from exc
        return cls.from_rows(values[row * 4:row * 4 + 4] for row in range(4))

    def __str__(self) -> str:
        lines = []
        for row in self._rows():
            cells = (0.0 if abs(value) < 0.00001 else value for value in row)
            lines.append("".join(f"{value:>12g} " for value in cells) + "\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self._rows()!r})"